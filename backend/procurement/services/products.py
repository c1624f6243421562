"""
Product transaction scripts.

Creating a product also creates its pending payment stub; deleting it
releases its payments (pending ones are deleted, approved ones only lose
the link).
"""

import logging
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.milestone import ProductMilestone
from procurement.models.product import Product
from procurement.services import links as link_registry
from procurement.services import payment_lifecycle
from procurement.services.currency import decimal_fields
from procurement.services.ids import generate_id, PRODUCT_PREFIX

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = (
    "quantity", "price_per_unit", "price_total",
    "cbm_per_unit", "cbm_total", "kg_per_unit", "kg_total",
)


async def get_product(db: AsyncSession, product_id: str) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.product_id == product_id))
    return result.scalars().first()


async def list_products(db: AsyncSession, order_id: str) -> List[Product]:
    result = await db.execute(select(Product).where(Product.order_id == order_id).order_by(Product.id))
    return list(result.scalars().all())


async def add_product(db: AsyncSession, order_id: str, data: dict) -> Product:
    """Insert the product and its pending payment in one transaction"""
    product = Product(
        product_id=generate_id(PRODUCT_PREFIX),
        order_id=order_id,
        **decimal_fields(data, NUMERIC_FIELDS),
    )
    db.add(product)
    await db.flush()

    await payment_lifecycle.create_product_stub(db, product)
    await db.commit()
    logger.info(f"Product {product.product_id} added to order {order_id}")
    return product


async def update_product(db: AsyncSession, product_id: str, data: dict) -> bool:
    """
    Partial update. Stored values are taken as given: price_total is not
    recomputed from quantity, and the payment stub keeps its amount.
    """
    product = await get_product(db, product_id)
    if not product:
        return False

    for key, value in decimal_fields(data, NUMERIC_FIELDS).items():
        setattr(product, key, value)
    await db.commit()
    logger.info(f"Product {product_id} updated: {sorted(data)}")
    return True


async def delete_product(db: AsyncSession, product_id: str) -> bool:
    product = await get_product(db, product_id)
    if not product:
        return False

    await link_registry.delete_cost_links_of_product(db, product_id)
    await db.execute(delete(ProductMilestone).where(ProductMilestone.product_id == product_id))
    await payment_lifecycle.release_product_payments(db, product_id)
    await db.delete(product)
    await db.commit()
    logger.info(f"Product {product_id} deleted")
    return True


async def list_product_suppliers(db: AsyncSession) -> List[str]:
    """Distinct supplier names used on any product, blanks dropped"""
    result = await db.execute(select(Product.supplier).order_by(Product.id))
    names = [s.strip() for s in result.scalars().all() if s and s.strip()]
    return list(dict.fromkeys(names))
