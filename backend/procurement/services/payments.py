"""Payment transaction scripts"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.payment import Payment
from procurement.services import links as link_registry
from procurement.services import payment_lifecycle
from procurement.services.currency import decimal_fields
from procurement.services.ids import generate_id, PAYMENT_PREFIX

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("amount",)


async def get_payment(db: AsyncSession, payment_id: str) -> Optional[Payment]:
    return await payment_lifecycle.get_payment_row(db, payment_id)


async def list_payments(db: AsyncSession, order_id: str) -> List[Payment]:
    result = await db.execute(
        select(Payment).where(Payment.order_id == order_id).order_by(Payment.date, Payment.id)
    )
    return list(result.scalars().all())


async def add_payment(db: AsyncSession, order_id: str, data: dict) -> Payment:
    """Manual payment, optionally linked to products and costs"""
    data = dict(data)
    product_ids = data.pop("linked_product_ids", None) or []
    cost_ids = data.pop("linked_cost_ids", None) or []

    payment = Payment(
        payment_id=generate_id(PAYMENT_PREFIX),
        order_id=order_id,
        **decimal_fields(data, NUMERIC_FIELDS),
    )
    db.add(payment)
    await db.flush()
    await link_registry.add_payment_links(db, payment.payment_id, product_ids, cost_ids)
    await db.commit()
    logger.info(f"Payment {payment.payment_id} added to order {order_id} ({payment.status})")
    return payment


async def update_payment(db: AsyncSession, payment_id: str, data: dict) -> bool:
    """Direct edit, status included; not part of the automatic lifecycle"""
    payment = await get_payment(db, payment_id)
    if not payment:
        return False

    for key, value in decimal_fields(data, NUMERIC_FIELDS).items():
        setattr(payment, key, value)
    await db.commit()
    logger.info(f"Payment {payment_id} updated: {sorted(data)}")
    return True


async def set_payment_links(db: AsyncSession, payment_id: str,
                            product_ids: List[str], cost_ids: List[str]) -> bool:
    payment = await get_payment(db, payment_id)
    if not payment:
        return False

    await link_registry.replace_payment_links(db, payment_id, product_ids, cost_ids)
    await db.commit()
    return True


async def approve_payment(db: AsyncSession, payment_id: str) -> bool:
    if not await payment_lifecycle.approve_payment(db, payment_id):
        return False
    await db.commit()
    return True


async def dismiss_payment(db: AsyncSession, payment_id: str) -> bool:
    if not await payment_lifecycle.dismiss_payment(db, payment_id):
        return False
    await db.commit()
    return True


async def delete_payment(db: AsyncSession, payment_id: str) -> bool:
    """Manual delete in any state; the payment and all its links go"""
    payment = await get_payment(db, payment_id)
    if not payment:
        return False

    await payment_lifecycle.remove_payment(db, payment)
    await db.commit()
    logger.info(f"Payment {payment_id} deleted ({payment.status})")
    return True
