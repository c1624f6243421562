"""Milestone API: types, order milestones, product milestones"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.common import MILESTONE_LEVEL_PATTERN
from procurement.schemas.milestone import (
    MilestoneTypeCreate, MilestoneTypeSeed, MilestoneTypeUpdate, MilestoneTypeResponse,
    MilestoneUpdate, LegacyMilestoneCreate,
)
from procurement.services import milestones as milestone_service
from procurement.services import orders as order_service

router = APIRouter()


# ===== milestone types =====

@router.get("/types", response_model=List[MilestoneTypeResponse])
async def list_milestone_types(
    *,
    db: AsyncSession = Depends(get_db),
    level: Optional[str] = Query(None, pattern=MILESTONE_LEVEL_PATTERN)) -> Any:
    return await milestone_service.list_milestone_types(db, level)


@router.post("/types", response_model=MilestoneTypeResponse)
async def add_milestone_type(*, db: AsyncSession = Depends(get_db), type_in: MilestoneTypeCreate) -> Any:
    return await milestone_service.add_milestone_type(db, type_in.model_dump())


@router.post("/types/seed")
async def seed_milestone_type(*, db: AsyncSession = Depends(get_db), type_in: MilestoneTypeSeed) -> Any:
    """Insert a type with a fixed id; an existing id is left as is"""
    type_id = await milestone_service.seed_milestone_type(db, type_in.model_dump())
    return {"type_id": type_id}


@router.put("/types/{type_id}")
async def update_milestone_type(
    *, db: AsyncSession = Depends(get_db), type_id: str, type_in: MilestoneTypeUpdate) -> Any:
    if not await milestone_service.update_milestone_type(db, type_id, type_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Milestone type not found")
    return {"success": True}


@router.delete("/types/{type_id}")
async def delete_milestone_type(*, db: AsyncSession = Depends(get_db), type_id: str) -> Any:
    if not await milestone_service.delete_milestone_type(db, type_id):
        raise HTTPException(status_code=404, detail="Milestone type not found")
    return {"success": True}


# ===== legacy import =====

@router.post("/legacy")
async def add_legacy_milestone(*, db: AsyncSession = Depends(get_db), milestone_in: LegacyMilestoneCreate) -> Any:
    if not await order_service.get_order(db, milestone_in.order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    milestone_id = await milestone_service.add_legacy_milestone(db, milestone_in.model_dump())
    return {"milestone_id": milestone_id}


# ===== order milestones =====

@router.put("/order/{milestone_id}")
async def update_order_milestone(
    *, db: AsyncSession = Depends(get_db), milestone_id: str, milestone_in: MilestoneUpdate) -> Any:
    ok = await milestone_service.update_order_milestone(db, milestone_id, milestone_in.model_dump(exclude_unset=True))
    if not ok:
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"success": True}


@router.delete("/order/{milestone_id}")
async def delete_order_milestone(*, db: AsyncSession = Depends(get_db), milestone_id: str) -> Any:
    if not await milestone_service.delete_order_milestone(db, milestone_id):
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"success": True}


# ===== product milestones =====

@router.put("/product/{milestone_id}")
async def update_product_milestone(
    *, db: AsyncSession = Depends(get_db), milestone_id: str, milestone_in: MilestoneUpdate) -> Any:
    ok = await milestone_service.update_product_milestone(db, milestone_id, milestone_in.model_dump(exclude_unset=True))
    if not ok:
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"success": True}


@router.delete("/product/{milestone_id}")
async def delete_product_milestone(*, db: AsyncSession = Depends(get_db), milestone_id: str) -> Any:
    if not await milestone_service.delete_product_milestone(db, milestone_id):
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"success": True}
