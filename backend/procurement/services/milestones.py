"""Milestone types and order / product milestones"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.milestone import (
    MilestoneType, OrderMilestone, ProductMilestone, LEGACY_TYPE_ID
)
from procurement.services.ids import (
    generate_id, MILESTONE_TYPE_PREFIX, ORDER_MILESTONE_PREFIX, PRODUCT_MILESTONE_PREFIX
)

logger = logging.getLogger(__name__)


async def _first(db: AsyncSession, model, column, value):
    result = await db.execute(select(model).where(column == value))
    return result.scalars().first()


async def _patch(db: AsyncSession, row, data: dict) -> bool:
    if not row:
        return False
    for key, value in data.items():
        setattr(row, key, value)
    await db.commit()
    return True


async def _remove(db: AsyncSession, row) -> bool:
    if not row:
        return False
    await db.delete(row)
    await db.commit()
    return True


# ===== milestone types =====

async def list_milestone_types(db: AsyncSession, level: Optional[str] = None) -> List[MilestoneType]:
    query = select(MilestoneType).order_by(MilestoneType.default_order, MilestoneType.id)
    if level:
        query = query.where(MilestoneType.level == level)
    result = await db.execute(query)
    return list(result.scalars().all())


async def add_milestone_type(db: AsyncSession, data: dict) -> MilestoneType:
    milestone_type = MilestoneType(type_id=generate_id(MILESTONE_TYPE_PREFIX), **data)
    db.add(milestone_type)
    await db.commit()
    logger.info(f"Milestone type {milestone_type.type_id} ({milestone_type.name}) added")
    return milestone_type


async def seed_milestone_type(db: AsyncSession, data: dict) -> str:
    """Create a type with a fixed id unless it already exists"""
    existing = await _first(db, MilestoneType, MilestoneType.type_id, data["type_id"])
    if existing:
        return existing.type_id
    db.add(MilestoneType(**data))
    await db.commit()
    return data["type_id"]


async def update_milestone_type(db: AsyncSession, type_id: str, data: dict) -> bool:
    return await _patch(db, await _first(db, MilestoneType, MilestoneType.type_id, type_id), data)


async def delete_milestone_type(db: AsyncSession, type_id: str) -> bool:
    return await _remove(db, await _first(db, MilestoneType, MilestoneType.type_id, type_id))


# ===== order milestones =====

async def list_order_milestones(db: AsyncSession, order_id: str) -> List[OrderMilestone]:
    result = await db.execute(select(OrderMilestone).where(OrderMilestone.order_id == order_id))
    return list(result.scalars().all())


async def add_order_milestone(db: AsyncSession, order_id: str, data: dict) -> OrderMilestone:
    milestone = OrderMilestone(milestone_id=generate_id(ORDER_MILESTONE_PREFIX), order_id=order_id, **data)
    db.add(milestone)
    await db.commit()
    return milestone


async def update_order_milestone(db: AsyncSession, milestone_id: str, data: dict) -> bool:
    return await _patch(db, await _first(db, OrderMilestone, OrderMilestone.milestone_id, milestone_id), data)


async def delete_order_milestone(db: AsyncSession, milestone_id: str) -> bool:
    return await _remove(db, await _first(db, OrderMilestone, OrderMilestone.milestone_id, milestone_id))


# ===== product milestones =====

async def list_product_milestones(db: AsyncSession, product_id: str) -> List[ProductMilestone]:
    result = await db.execute(select(ProductMilestone).where(ProductMilestone.product_id == product_id))
    return list(result.scalars().all())


async def add_product_milestone(db: AsyncSession, product_id: str, data: dict) -> ProductMilestone:
    milestone = ProductMilestone(
        milestone_id=generate_id(PRODUCT_MILESTONE_PREFIX), product_id=product_id, **data
    )
    db.add(milestone)
    await db.commit()
    return milestone


async def update_product_milestone(db: AsyncSession, milestone_id: str, data: dict) -> bool:
    return await _patch(db, await _first(db, ProductMilestone, ProductMilestone.milestone_id, milestone_id), data)


async def delete_product_milestone(db: AsyncSession, milestone_id: str) -> bool:
    return await _remove(db, await _first(db, ProductMilestone, ProductMilestone.milestone_id, milestone_id))


async def add_legacy_milestone(db: AsyncSession, data: dict) -> str:
    """
    Import an old free-text milestone. With a product_id it becomes a
    product milestone, otherwise an order milestone; the text goes into
    status.
    """
    fields = dict(
        milestone_type_id=LEGACY_TYPE_ID,
        target_date=data.get("target_date"),
        actual_date=data.get("actual_date"),
        status=data["description"],
        notes=data.get("notes"),
    )
    if data.get("product_id"):
        milestone = await add_product_milestone(db, data["product_id"], fields)
    else:
        milestone = await add_order_milestone(db, data["order_id"], fields)
    return milestone.milestone_id
