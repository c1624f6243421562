"""
Order settlement: per-product landed cost and the order balance.

All figures are derived on every read from the stored rows and the
order's rates. Nothing computed here is written back.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from procurement.models.payment import PAYMENT_APPROVED
from procurement.services.allocation import allocate_all
from procurement.services.currency import ExchangeRates, to_decimal

ZERO = Decimal("0")


@dataclass
class ProductCosts:
    """A product with its computed ILS figures"""
    product: object
    price_ils: Decimal
    additional_costs_ils: Decimal
    final_cost_ils: Decimal
    final_cost_per_unit_ils: Decimal


@dataclass
class CostAmounts:
    cost: object
    amount_ils: Decimal
    linked_product_count: int


@dataclass
class PaymentAmounts:
    payment: object
    amount_ils: Decimal

    @property
    def is_approved(self) -> bool:
        return self.payment.status == PAYMENT_APPROVED


@dataclass
class OrderSummary:
    """Order level totals (ILS)"""
    product_count: int = 0
    total_products_ils: Decimal = ZERO
    total_costs_ils: Decimal = ZERO
    total_order_ils: Decimal = ZERO
    total_paid_ils: Decimal = ZERO
    balance_ils: Decimal = ZERO
    total_cbm: Decimal = ZERO
    total_kg: Decimal = ZERO


def calculate_product_costs(products: Sequence, costs: Iterable, links: Iterable,
                            rates: ExchangeRates) -> List[ProductCosts]:
    """Price, allocated additional costs and landed cost of every product"""
    allocated = allocate_all(costs, products, links, rates)

    result = []
    for product in products:
        price_ils = rates.convert(product.price_total, product.currency)
        additional = allocated.get(product.product_id, ZERO)
        final_cost = price_ils + additional
        quantity = to_decimal(product.quantity)
        per_unit = final_cost / quantity if quantity > ZERO else ZERO
        result.append(ProductCosts(
            product=product,
            price_ils=price_ils,
            additional_costs_ils=additional,
            final_cost_ils=final_cost,
            final_cost_per_unit_ils=per_unit,
        ))
    return result


def cost_amounts(costs: Iterable, links: Iterable, rates: ExchangeRates) -> List[CostAmounts]:
    links = list(links)
    return [
        CostAmounts(
            cost=cost,
            amount_ils=rates.convert(cost.amount, cost.currency),
            linked_product_count=sum(1 for l in links if l.cost_id == cost.cost_id and l.is_linked),
        )
        for cost in costs
    ]


def payment_amounts(payments: Iterable, rates: ExchangeRates) -> List[PaymentAmounts]:
    return [
        PaymentAmounts(payment=payment, amount_ils=rates.convert(payment.amount, payment.currency))
        for payment in payments
    ]


def calculate_order_summary(products: Sequence[ProductCosts], costs: Sequence[CostAmounts],
                            payments: Sequence[PaymentAmounts]) -> OrderSummary:
    """
    Totals of an order. Only approved payments count as paid; pending
    stubs are shown but do not change the balance.
    """
    total_products = sum((p.price_ils for p in products), ZERO)
    total_costs = sum((c.amount_ils for c in costs), ZERO)
    total_order = total_products + total_costs
    total_paid = sum((p.amount_ils for p in payments if p.is_approved), ZERO)

    return OrderSummary(
        product_count=len(products),
        total_products_ils=total_products,
        total_costs_ils=total_costs,
        total_order_ils=total_order,
        total_paid_ils=total_paid,
        balance_ils=total_order - total_paid,
        total_cbm=sum((to_decimal(p.product.cbm_total) for p in products), ZERO),
        total_kg=sum((to_decimal(p.product.kg_total) for p in products), ZERO),
    )


def summarize_order(order, products: Sequence, costs: Iterable, payments: Iterable) -> OrderSummary:
    """
    Summary for order lists. Allocation does not change any order level
    total, so links are not needed here.
    """
    rates = ExchangeRates.from_order(order)
    return calculate_order_summary(
        calculate_product_costs(products, [], [], rates),
        cost_amounts(costs, [], rates),
        payment_amounts(payments, rates),
    )
