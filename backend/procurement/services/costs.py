"""
Additional cost transaction scripts.

Creating a cost also creates its pending payment stub; deleting it
removes its product links and releases its payments.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.additional_cost import AdditionalCost
from procurement.services import links as link_registry
from procurement.services import payment_lifecycle
from procurement.services.currency import decimal_fields
from procurement.services.ids import generate_id, COST_PREFIX

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("amount",)


async def get_cost(db: AsyncSession, cost_id: str) -> Optional[AdditionalCost]:
    result = await db.execute(select(AdditionalCost).where(AdditionalCost.cost_id == cost_id))
    return result.scalars().first()


async def list_costs(db: AsyncSession, order_id: str) -> List[AdditionalCost]:
    result = await db.execute(
        select(AdditionalCost).where(AdditionalCost.order_id == order_id).order_by(AdditionalCost.id)
    )
    return list(result.scalars().all())


async def add_cost(db: AsyncSession, order_id: str, data: dict) -> AdditionalCost:
    """Insert the cost and its pending payment in one transaction"""
    cost = AdditionalCost(
        cost_id=generate_id(COST_PREFIX),
        order_id=order_id,
        **decimal_fields(data, NUMERIC_FIELDS),
    )
    db.add(cost)
    await db.flush()

    await payment_lifecycle.create_cost_stub(db, cost)
    await db.commit()
    logger.info(f"Cost {cost.cost_id} added to order {order_id} ({cost.allocation_method})")
    return cost


async def update_cost(db: AsyncSession, cost_id: str, data: dict) -> bool:
    """Partial update; the payment stub keeps its amount"""
    cost = await get_cost(db, cost_id)
    if not cost:
        return False

    for key, value in decimal_fields(data, NUMERIC_FIELDS).items():
        setattr(cost, key, value)
    await db.commit()
    logger.info(f"Cost {cost_id} updated: {sorted(data)}")
    return True


async def delete_cost(db: AsyncSession, cost_id: str) -> bool:
    cost = await get_cost(db, cost_id)
    if not cost:
        return False

    await link_registry.delete_cost_links_of_cost(db, cost_id)
    await payment_lifecycle.release_cost_payments(db, cost_id)
    await db.delete(cost)
    await db.commit()
    logger.info(f"Cost {cost_id} deleted")
    return True


async def set_cost_product_links(db: AsyncSession, cost_id: str, product_ids: List[str]) -> bool:
    """Replace the products a cost applies to; [] means all products"""
    cost = await get_cost(db, cost_id)
    if not cost:
        return False

    await link_registry.replace_cost_product_links(db, cost_id, product_ids)
    await db.commit()
    logger.info(f"Cost {cost_id} linked to {len(product_ids)} products")
    return True
