"""
Link registry: cost<->product and payment<->product/cost associations.

Updating a link set replaces it: every existing row of the entity is
deleted and the new set inserted. The functions only stage changes on the
session; the calling transaction script commits once, so no half-replaced
set is ever visible.
"""

from typing import Iterable, List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.links import CostProductLink, PaymentProductLink, PaymentCostLink


def _unique(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


# ===== cost <-> product =====

async def cost_links_for_costs(db: AsyncSession, cost_ids: Iterable[str]) -> List[CostProductLink]:
    cost_ids = list(cost_ids)
    if not cost_ids:
        return []
    result = await db.execute(select(CostProductLink).where(CostProductLink.cost_id.in_(cost_ids)))
    return list(result.scalars().all())


async def cost_links_by_product(db: AsyncSession, product_id: str) -> List[CostProductLink]:
    result = await db.execute(select(CostProductLink).where(CostProductLink.product_id == product_id))
    return list(result.scalars().all())


async def replace_cost_product_links(db: AsyncSession, cost_id: str, product_ids: Iterable[str]) -> List[CostProductLink]:
    """Replace the linked product set of a cost. An empty set means all products."""
    await db.execute(delete(CostProductLink).where(CostProductLink.cost_id == cost_id))
    links = [CostProductLink(cost_id=cost_id, product_id=pid, is_linked=True) for pid in _unique(product_ids)]
    db.add_all(links)
    await db.flush()
    return links


async def delete_cost_links_of_cost(db: AsyncSession, cost_id: str) -> None:
    await db.execute(delete(CostProductLink).where(CostProductLink.cost_id == cost_id))


async def delete_cost_links_of_product(db: AsyncSession, product_id: str) -> None:
    await db.execute(delete(CostProductLink).where(CostProductLink.product_id == product_id))


# ===== payment <-> product / cost =====

async def payment_product_links_by_payment(db: AsyncSession, payment_ids: Iterable[str]) -> List[PaymentProductLink]:
    payment_ids = list(payment_ids)
    if not payment_ids:
        return []
    result = await db.execute(select(PaymentProductLink).where(PaymentProductLink.payment_id.in_(payment_ids)))
    return list(result.scalars().all())


async def payment_product_links_by_product(db: AsyncSession, product_id: str) -> List[PaymentProductLink]:
    result = await db.execute(select(PaymentProductLink).where(PaymentProductLink.product_id == product_id))
    return list(result.scalars().all())


async def payment_cost_links_by_payment(db: AsyncSession, payment_ids: Iterable[str]) -> List[PaymentCostLink]:
    payment_ids = list(payment_ids)
    if not payment_ids:
        return []
    result = await db.execute(select(PaymentCostLink).where(PaymentCostLink.payment_id.in_(payment_ids)))
    return list(result.scalars().all())


async def payment_cost_links_by_cost(db: AsyncSession, cost_id: str) -> List[PaymentCostLink]:
    result = await db.execute(select(PaymentCostLink).where(PaymentCostLink.cost_id == cost_id))
    return list(result.scalars().all())


async def delete_payment_links(db: AsyncSession, payment_id: str) -> None:
    """Remove every product and cost link of a payment"""
    await db.execute(delete(PaymentProductLink).where(PaymentProductLink.payment_id == payment_id))
    await db.execute(delete(PaymentCostLink).where(PaymentCostLink.payment_id == payment_id))


async def add_payment_links(db: AsyncSession, payment_id: str,
                            product_ids: Iterable[str] = (), cost_ids: Iterable[str] = ()) -> None:
    db.add_all([PaymentProductLink(payment_id=payment_id, product_id=pid) for pid in _unique(product_ids)])
    db.add_all([PaymentCostLink(payment_id=payment_id, cost_id=cid) for cid in _unique(cost_ids)])
    await db.flush()


async def replace_payment_links(db: AsyncSession, payment_id: str,
                                product_ids: Iterable[str], cost_ids: Iterable[str]) -> None:
    await delete_payment_links(db, payment_id)
    await add_payment_links(db, payment_id, product_ids, cost_ids)
