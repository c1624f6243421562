"""In-memory rows for the pure calculation tests"""

from decimal import Decimal
from types import SimpleNamespace


def make_product(product_id, price_total=0, currency="USD", quantity=0, cbm_total=0, kg_total=0):
    return SimpleNamespace(
        product_id=product_id,
        price_total=Decimal(str(price_total)),
        currency=currency,
        quantity=Decimal(str(quantity)),
        cbm_total=Decimal(str(cbm_total)),
        kg_total=Decimal(str(kg_total)),
    )


def make_cost(cost_id, amount, currency="USD", allocation_method="שווה"):
    return SimpleNamespace(
        cost_id=cost_id,
        amount=Decimal(str(amount)),
        currency=currency,
        allocation_method=allocation_method,
    )


def make_link(cost_id, product_id, is_linked=True):
    return SimpleNamespace(cost_id=cost_id, product_id=product_id, is_linked=is_linked)


def make_payment(amount, currency="USD", status="pending"):
    return SimpleNamespace(amount=Decimal(str(amount)), currency=currency, status=status)
