"""
Additional cost allocation.

Each additional cost is converted to ILS and spread over its linked
products with one of five methods:

- שווה (equal): the same share for every linked product
- נפח (volume): proportional to cbm_total
- משקל (weight): proportional to kg_total
- עלות (cost): proportional to the product's own price in ILS
- כמות (quantity): proportional to quantity

A cost with no is_linked rows applies to ALL products of the order.
Costs are allocated independently and the shares add up per product.
"""

from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence

from procurement.services.currency import ExchangeRates, to_decimal

ZERO = Decimal("0")


class AllocationMethod(str, Enum):
    """How a shared cost is spread over products"""
    EQUAL = "שווה"
    VOLUME = "נפח"
    WEIGHT = "משקל"
    COST = "עלות"
    QUANTITY = "כמות"

    @classmethod
    def parse(cls, value) -> "AllocationMethod":
        """Unknown values allocate equally"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.EQUAL


def _weight_fn(method: AllocationMethod, rates: ExchangeRates) -> Callable:
    """Weight of one product for a proportional method, None for equal"""
    weights = {
        AllocationMethod.VOLUME: lambda p: to_decimal(p.cbm_total),
        AllocationMethod.WEIGHT: lambda p: to_decimal(p.kg_total),
        AllocationMethod.COST: lambda p: rates.convert(p.price_total, p.currency),
        AllocationMethod.QUANTITY: lambda p: to_decimal(p.quantity),
    }
    return weights.get(method)


def linked_product_ids(cost_id: str, links: Iterable) -> List[str]:
    """Product ids explicitly linked to a cost (is_linked rows only)"""
    return [link.product_id for link in links if link.cost_id == cost_id and link.is_linked]


def linked_products(cost_id: str, products: Sequence, links: Iterable) -> List:
    """
    Products a cost applies to.

    No explicit link means the cost applies to every product of the
    order, not to none of them.
    """
    explicit = set(linked_product_ids(cost_id, links))
    if not explicit:
        return list(products)
    return [p for p in products if p.product_id in explicit]


def split_amount(amount: Decimal, products: Sequence, method: AllocationMethod,
                 rates: ExchangeRates) -> Dict[str, Decimal]:
    """Split an ILS amount over products; a zero weight total gives zero shares"""
    if not products:
        return {}

    weight_of = _weight_fn(method, rates)
    if weight_of is None:
        share = amount / len(products)
        return {p.product_id: share for p in products}

    weights = {p.product_id: weight_of(p) for p in products}
    total = sum(weights.values(), ZERO)
    if total == ZERO:
        return {product_id: ZERO for product_id in weights}
    return {product_id: amount * (weight / total) for product_id, weight in weights.items()}


def allocate(cost, products: Sequence, links: Iterable, rates: ExchangeRates) -> Dict[str, Decimal]:
    """
    Allocate one cost over the products of its order.

    Returns a share (ILS) for every product passed in; products outside
    the linked set get zero.
    """
    links = list(links)
    cost_ils = rates.convert(cost.amount, cost.currency)
    method = AllocationMethod.parse(cost.allocation_method)

    shares = {p.product_id: ZERO for p in products}
    shares.update(split_amount(cost_ils, linked_products(cost.cost_id, products, links), method, rates))
    return shares


def allocate_all(costs: Iterable, products: Sequence, links: Iterable,
                 rates: ExchangeRates) -> Dict[str, Decimal]:
    """Total allocated ILS per product over all costs of an order"""
    links = list(links)
    totals = {p.product_id: ZERO for p in products}
    for cost in costs:
        for product_id, share in allocate(cost, products, links, rates).items():
            totals[product_id] += share
    return totals
