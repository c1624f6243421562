"""Supplier registry"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.supplier import Supplier
from procurement.services.ids import generate_id, SUPPLIER_PREFIX

logger = logging.getLogger(__name__)


async def list_suppliers(db: AsyncSession) -> List[Supplier]:
    result = await db.execute(select(Supplier).order_by(Supplier.name))
    return list(result.scalars().all())


async def get_supplier(db: AsyncSession, supplier_id: str) -> Optional[Supplier]:
    result = await db.execute(select(Supplier).where(Supplier.supplier_id == supplier_id))
    return result.scalars().first()


async def get_supplier_by_name(db: AsyncSession, name: str) -> Optional[Supplier]:
    result = await db.execute(select(Supplier).where(Supplier.name == name))
    return result.scalars().first()


async def add_supplier(db: AsyncSession, data: dict) -> Supplier:
    supplier = Supplier(supplier_id=generate_id(SUPPLIER_PREFIX), created_date=datetime.utcnow(), **data)
    db.add(supplier)
    await db.commit()
    logger.info(f"Supplier {supplier.supplier_id} ({supplier.name}) added")
    return supplier


async def seed_supplier(db: AsyncSession, data: dict) -> str:
    """Import a supplier with a fixed id unless it already exists"""
    existing = await get_supplier(db, data["supplier_id"])
    if existing:
        return existing.supplier_id
    data = dict(data)
    data["created_date"] = data.get("created_date") or datetime.utcnow()
    db.add(Supplier(**data))
    await db.commit()
    return data["supplier_id"]


async def update_supplier(db: AsyncSession, supplier_id: str, data: dict) -> bool:
    supplier = await get_supplier(db, supplier_id)
    if not supplier:
        return False
    for key, value in data.items():
        setattr(supplier, key, value)
    await db.commit()
    return True


async def delete_supplier(db: AsyncSession, supplier_id: str) -> bool:
    supplier = await get_supplier(db, supplier_id)
    if not supplier:
        return False
    await db.delete(supplier)
    await db.commit()
    return True
