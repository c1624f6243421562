"""
Order transaction scripts and the full order read path.

Every write runs on one session and commits once at the end; if anything
fails before the commit the session rolls back and nothing is applied.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.config import settings
from procurement.models.additional_cost import AdditionalCost
from procurement.models.links import CostProductLink, PaymentProductLink, PaymentCostLink
from procurement.models.milestone import MilestoneType, OrderMilestone, ProductMilestone
from procurement.models.order import PurchaseOrder
from procurement.models.payment import Payment
from procurement.models.product import Product
from procurement.services import links as link_registry
from procurement.services.currency import ExchangeRates, decimal_fields
from procurement.services.ids import generate_order_id
from procurement.services.rates import RateProvider
from procurement.services.settlement import (
    ProductCosts, CostAmounts, PaymentAmounts, OrderSummary,
    calculate_product_costs, cost_amounts, payment_amounts,
    calculate_order_summary, summarize_order,
)

logger = logging.getLogger(__name__)

RATE_FIELDS = ("usd_rate", "cny_rate")


@dataclass
class OrderFull:
    """One order with every related row and all computed figures"""
    order: PurchaseOrder
    products: List[ProductCosts]
    costs: List[CostAmounts]
    payments: List[PaymentAmounts]
    links: List[CostProductLink]
    payment_product_links: List[PaymentProductLink]
    payment_cost_links: List[PaymentCostLink]
    order_milestones: List[OrderMilestone]
    product_milestones: List[ProductMilestone]
    milestone_types: List[MilestoneType]
    summary: OrderSummary = field(default_factory=OrderSummary)


async def get_order(db: AsyncSession, order_id: str) -> Optional[PurchaseOrder]:
    result = await db.execute(select(PurchaseOrder).where(PurchaseOrder.order_id == order_id))
    return result.scalars().first()


async def _rows(db: AsyncSession, model, column, value) -> list:
    result = await db.execute(select(model).where(column == value))
    return list(result.scalars().all())


async def create_order(db: AsyncSession, data: dict, rate_provider: RateProvider = None) -> tuple:
    """
    Create an order and return (order, rates_live). Rates missing from
    data come from the rate provider, fetched once at creation only.
    """
    data = dict(data)
    rates_live = False
    if data.get("usd_rate") is None or data.get("cny_rate") is None:
        quote = await (rate_provider or RateProvider()).get_rates()
        if data.get("usd_rate") is None:
            data["usd_rate"] = quote.usd
        if data.get("cny_rate") is None:
            data["cny_rate"] = quote.cny
        rates_live = quote.is_live

    data = decimal_fields(data, RATE_FIELDS)
    data["status"] = data.get("status") or settings.DEFAULT_ORDER_STATUS

    order = PurchaseOrder(
        order_id=await generate_order_id(db),
        created_date=datetime.utcnow(),
        **data,
    )
    db.add(order)
    await db.commit()
    logger.info(f"Order {order.order_id} created (USD={order.usd_rate}, CNY={order.cny_rate})")
    return order, rates_live


async def update_order(db: AsyncSession, order_id: str, data: dict) -> bool:
    """Partial update. New rates change every derived total of the order."""
    order = await get_order(db, order_id)
    if not order:
        return False

    for key, value in decimal_fields(data, RATE_FIELDS).items():
        setattr(order, key, value)
    await db.commit()
    logger.info(f"Order {order_id} updated: {sorted(data)}")
    return True


async def delete_order(db: AsyncSession, order_id: str) -> bool:
    """Delete an order with all its products, costs, payments, links and milestones"""
    order = await get_order(db, order_id)
    if not order:
        return False

    product_ids = [p.product_id for p in await _rows(db, Product, Product.order_id, order_id)]
    cost_ids = [c.cost_id for c in await _rows(db, AdditionalCost, AdditionalCost.order_id, order_id)]
    payment_ids = [p.payment_id for p in await _rows(db, Payment, Payment.order_id, order_id)]

    if product_ids:
        await db.execute(delete(ProductMilestone).where(ProductMilestone.product_id.in_(product_ids)))
        await db.execute(delete(CostProductLink).where(CostProductLink.product_id.in_(product_ids)))
    if cost_ids:
        await db.execute(delete(CostProductLink).where(CostProductLink.cost_id.in_(cost_ids)))
    if payment_ids:
        await db.execute(delete(PaymentProductLink).where(PaymentProductLink.payment_id.in_(payment_ids)))
        await db.execute(delete(PaymentCostLink).where(PaymentCostLink.payment_id.in_(payment_ids)))

    await db.execute(delete(Product).where(Product.order_id == order_id))
    await db.execute(delete(AdditionalCost).where(AdditionalCost.order_id == order_id))
    await db.execute(delete(Payment).where(Payment.order_id == order_id))
    await db.execute(delete(OrderMilestone).where(OrderMilestone.order_id == order_id))
    await db.delete(order)
    await db.commit()

    logger.info(
        f"Order {order_id} deleted with {len(product_ids)} products, "
        f"{len(cost_ids)} costs, {len(payment_ids)} payments"
    )
    return True


async def list_orders_with_summary(db: AsyncSession) -> List[tuple]:
    """[(order, summary)] newest first"""
    result = await db.execute(select(PurchaseOrder).order_by(PurchaseOrder.created_date.desc()))
    orders = result.scalars().all()

    listed = []
    for order in orders:
        products = await _rows(db, Product, Product.order_id, order.order_id)
        costs = await _rows(db, AdditionalCost, AdditionalCost.order_id, order.order_id)
        payments = await _rows(db, Payment, Payment.order_id, order.order_id)
        listed.append((order, summarize_order(order, products, costs, payments)))
    return listed


async def get_order_full(db: AsyncSession, order_id: str) -> Optional[OrderFull]:
    """
    The single read path with allocation and settlement. Read only:
    nothing computed here is stored.
    """
    order = await get_order(db, order_id)
    if not order:
        return None

    products = await _rows(db, Product, Product.order_id, order_id)
    costs = await _rows(db, AdditionalCost, AdditionalCost.order_id, order_id)
    payments = await _rows(db, Payment, Payment.order_id, order_id)

    links = await link_registry.cost_links_for_costs(db, [c.cost_id for c in costs])
    payment_ids = [p.payment_id for p in payments]
    payment_product_links = await link_registry.payment_product_links_by_payment(db, payment_ids)
    payment_cost_links = await link_registry.payment_cost_links_by_payment(db, payment_ids)

    order_milestones = await _rows(db, OrderMilestone, OrderMilestone.order_id, order_id)
    product_ids = [p.product_id for p in products]
    product_milestones = []
    if product_ids:
        result = await db.execute(select(ProductMilestone).where(ProductMilestone.product_id.in_(product_ids)))
        product_milestones = list(result.scalars().all())
    result = await db.execute(select(MilestoneType).order_by(MilestoneType.default_order))
    milestone_types = list(result.scalars().all())

    rates = ExchangeRates.from_order(order)
    product_costs = calculate_product_costs(products, costs, links, rates)
    costs_ils = cost_amounts(costs, links, rates)
    payments_ils = payment_amounts(payments, rates)

    return OrderFull(
        order=order,
        products=product_costs,
        costs=costs_ils,
        payments=payments_ils,
        links=links,
        payment_product_links=payment_product_links,
        payment_cost_links=payment_cost_links,
        order_milestones=order_milestones,
        product_milestones=product_milestones,
        milestone_types=milestone_types,
        summary=calculate_order_summary(product_costs, costs_ils, payments_ils),
    )
