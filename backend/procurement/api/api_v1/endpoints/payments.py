"""Payment API"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.payment import PaymentUpdate, PaymentLinksUpdate, PaymentResponse
from procurement.services import payments as payment_service
from procurement.services import orders as order_service
from procurement.services.currency import ExchangeRates
from procurement.services.payment_lifecycle import PaymentStateError
from procurement.services.settlement import payment_amounts

from .responses import build_payment_response

router = APIRouter()


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(*, db: AsyncSession = Depends(get_db), payment_id: str) -> Any:
    payment = await payment_service.get_payment(db, payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    order = await order_service.get_order(db, payment.order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return build_payment_response(payment_amounts([payment], ExchangeRates.from_order(order))[0])


@router.put("/{payment_id}")
async def update_payment(
    *, db: AsyncSession = Depends(get_db), payment_id: str, payment_in: PaymentUpdate) -> Any:
    if not await payment_service.update_payment(db, payment_id, payment_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Payment not found")
    return {"success": True}


@router.put("/{payment_id}/links")
async def set_payment_links(
    *, db: AsyncSession = Depends(get_db), payment_id: str, links_in: PaymentLinksUpdate) -> Any:
    """Replace all product and cost links of the payment"""
    ok = await payment_service.set_payment_links(
        db, payment_id, links_in.linked_product_ids, links_in.linked_cost_ids
    )
    if not ok:
        raise HTTPException(status_code=404, detail="Payment not found")
    return {"success": True}


@router.post("/{payment_id}/approve")
async def approve_payment(*, db: AsyncSession = Depends(get_db), payment_id: str) -> Any:
    """Mark the money as actually paid"""
    if not await payment_service.approve_payment(db, payment_id):
        raise HTTPException(status_code=404, detail="Payment not found")
    return {"success": True}


@router.post("/{payment_id}/dismiss")
async def dismiss_payment(*, db: AsyncSession = Depends(get_db), payment_id: str) -> Any:
    """Cancel a pending payment"""
    try:
        ok = await payment_service.dismiss_payment(db, payment_id)
    except PaymentStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not ok:
        raise HTTPException(status_code=404, detail="Payment not found")
    return {"success": True}


@router.delete("/{payment_id}")
async def delete_payment(*, db: AsyncSession = Depends(get_db), payment_id: str) -> Any:
    if not await payment_service.delete_payment(db, payment_id):
        raise HTTPException(status_code=404, detail="Payment not found")
    return {"success": True}
