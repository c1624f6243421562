"""
Payment lifecycle: pending stubs, approval, dismissal and cascades.

    create product / cost  -> pending stub for the full value, linked back
    pending  --approve-->  approved
    pending  --dismiss-->  deleted (payment and all its links)
    source deleted, payment pending   -> deleted (the stub never happened)
    source deleted, payment approved  -> only that source link is removed

Approved payments are money that actually moved; they survive the
deletion of the line item they were created for. Editing a product or
cost never touches its stub.

These functions stage changes on the session and never commit.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.additional_cost import AdditionalCost
from procurement.models.links import PaymentProductLink, PaymentCostLink
from procurement.models.payment import Payment, PAYMENT_PENDING, PAYMENT_APPROVED
from procurement.models.product import Product
from procurement.services import links as link_registry
from procurement.services.currency import Currency
from procurement.services.ids import generate_id, PAYMENT_PREFIX

logger = logging.getLogger(__name__)


class PaymentStateError(Exception):
    """Transition not allowed from the payment's current status"""


def stub_description(subject: str) -> str:
    return f"תשלום עבור {subject}"


async def get_payment_row(db: AsyncSession, payment_id: str) -> Optional[Payment]:
    result = await db.execute(select(Payment).where(Payment.payment_id == payment_id))
    return result.scalars().first()


async def create_product_stub(db: AsyncSession, product: Product) -> Payment:
    """Pending payment for the full price of a new product"""
    currency = product.currency if product.currency in Currency.codes() else Currency.USD.value
    payment = Payment(
        payment_id=generate_id(PAYMENT_PREFIX),
        order_id=product.order_id,
        date=product.order_date or date.today(),
        amount=product.price_total,
        currency=currency,
        payee=product.supplier or "",
        description=stub_description(product.name),
        status=PAYMENT_PENDING,
    )
    db.add(payment)
    db.add(PaymentProductLink(payment_id=payment.payment_id, product_id=product.product_id))
    await db.flush()
    logger.info(f"Pending payment {payment.payment_id} created for product {product.product_id}")
    return payment


async def create_cost_stub(db: AsyncSession, cost: AdditionalCost) -> Payment:
    """Pending payment for the full amount of a new additional cost"""
    payment = Payment(
        payment_id=generate_id(PAYMENT_PREFIX),
        order_id=cost.order_id,
        date=date.today(),
        amount=cost.amount,
        currency=cost.currency,
        payee="",
        description=stub_description(cost.description),
        status=PAYMENT_PENDING,
    )
    db.add(payment)
    db.add(PaymentCostLink(payment_id=payment.payment_id, cost_id=cost.cost_id))
    await db.flush()
    logger.info(f"Pending payment {payment.payment_id} created for cost {cost.cost_id}")
    return payment


async def remove_payment(db: AsyncSession, payment: Payment) -> None:
    """Delete a payment together with all of its product and cost links"""
    await link_registry.delete_payment_links(db, payment.payment_id)
    await db.delete(payment)
    await db.flush()


async def approve_payment(db: AsyncSession, payment_id: str) -> bool:
    payment = await get_payment_row(db, payment_id)
    if not payment:
        return False
    if payment.status != PAYMENT_APPROVED:
        payment.status = PAYMENT_APPROVED
        logger.info(f"Payment {payment_id} approved ({payment.amount} {payment.currency})")
    return True


async def dismiss_payment(db: AsyncSession, payment_id: str) -> bool:
    """
    Cancel a pending payment: the payment and all its links are removed.
    Approved payments can only go through an explicit delete.
    """
    payment = await get_payment_row(db, payment_id)
    if not payment:
        return False
    if payment.status == PAYMENT_APPROVED:
        raise PaymentStateError(f"Payment {payment_id} is approved and cannot be dismissed")
    await remove_payment(db, payment)
    logger.info(f"Payment {payment_id} dismissed")
    return True


async def _release(db: AsyncSession, source: str, source_links: List, link_model) -> None:
    for link in source_links:
        payment = await get_payment_row(db, link.payment_id)
        if payment and payment.status == PAYMENT_PENDING:
            await remove_payment(db, payment)
            logger.info(f"Pending payment {payment.payment_id} deleted with {source}")
        else:
            # Approved (or already missing) payment: drop only this link
            await db.execute(delete(link_model).where(link_model.id == link.id))
            logger.info(f"Payment {link.payment_id} kept, unlinked from {source}")


async def release_product_payments(db: AsyncSession, product_id: str) -> None:
    """Apply the delete cascade to the payments linked to a product"""
    source_links = await link_registry.payment_product_links_by_product(db, product_id)
    await _release(db, f"product {product_id}", source_links, PaymentProductLink)


async def release_cost_payments(db: AsyncSession, cost_id: str) -> None:
    """Apply the delete cascade to the payments linked to a cost"""
    source_links = await link_registry.payment_cost_links_by_cost(db, cost_id)
    await _release(db, f"cost {cost_id}", source_links, PaymentCostLink)
