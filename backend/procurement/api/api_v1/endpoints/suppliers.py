"""Supplier API"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.supplier import SupplierCreate, SupplierSeed, SupplierUpdate, SupplierResponse
from procurement.services import suppliers as supplier_service

router = APIRouter()


@router.get("/", response_model=List[SupplierResponse])
async def list_suppliers(*, db: AsyncSession = Depends(get_db)) -> Any:
    return await supplier_service.list_suppliers(db)


@router.post("/", response_model=SupplierResponse)
async def add_supplier(*, db: AsyncSession = Depends(get_db), supplier_in: SupplierCreate) -> Any:
    return await supplier_service.add_supplier(db, supplier_in.model_dump())


@router.post("/seed")
async def seed_supplier(*, db: AsyncSession = Depends(get_db), supplier_in: SupplierSeed) -> Any:
    """Insert a supplier with a fixed id; an existing id is left as is"""
    supplier_id = await supplier_service.seed_supplier(db, supplier_in.model_dump())
    return {"supplier_id": supplier_id}


@router.get("/by-name/{name}", response_model=SupplierResponse)
async def get_supplier_by_name(*, db: AsyncSession = Depends(get_db), name: str) -> Any:
    supplier = await supplier_service.get_supplier_by_name(db, name)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(*, db: AsyncSession = Depends(get_db), supplier_id: str) -> Any:
    supplier = await supplier_service.get_supplier(db, supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.put("/{supplier_id}")
async def update_supplier(
    *, db: AsyncSession = Depends(get_db), supplier_id: str, supplier_in: SupplierUpdate) -> Any:
    if not await supplier_service.update_supplier(db, supplier_id, supplier_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Supplier not found")
    return {"success": True}


@router.delete("/{supplier_id}")
async def delete_supplier(*, db: AsyncSession = Depends(get_db), supplier_id: str) -> Any:
    if not await supplier_service.delete_supplier(db, supplier_id):
        raise HTTPException(status_code=404, detail="Supplier not found")
    return {"success": True}
