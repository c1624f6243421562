"""Product API"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.milestone import MilestoneCreate, ProductMilestoneResponse
from procurement.schemas.product import ProductUpdate, ProductResponse
from procurement.services import products as product_service
from procurement.services import milestones as milestone_service

router = APIRouter()


@router.get("/suppliers", response_model=List[str])
async def list_product_suppliers(*, db: AsyncSession = Depends(get_db)) -> Any:
    """Distinct supplier names used on products"""
    return await product_service.list_product_suppliers(db)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(*, db: AsyncSession = Depends(get_db), product_id: str) -> Any:
    product = await product_service.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.put("/{product_id}")
async def update_product(
    *, db: AsyncSession = Depends(get_db), product_id: str, product_in: ProductUpdate) -> Any:
    if not await product_service.update_product(db, product_id, product_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"success": True}


@router.delete("/{product_id}")
async def delete_product(*, db: AsyncSession = Depends(get_db), product_id: str) -> Any:
    """Delete a product; its pending payment goes too, approved ones stay"""
    if not await product_service.delete_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"success": True}


@router.get("/{product_id}/milestones", response_model=List[ProductMilestoneResponse])
async def list_product_milestones(*, db: AsyncSession = Depends(get_db), product_id: str) -> Any:
    return await milestone_service.list_product_milestones(db, product_id)


@router.post("/{product_id}/milestones", response_model=ProductMilestoneResponse)
async def add_product_milestone(
    *, db: AsyncSession = Depends(get_db), product_id: str, milestone_in: MilestoneCreate) -> Any:
    if not await product_service.get_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return await milestone_service.add_product_milestone(db, product_id, milestone_in.model_dump())
