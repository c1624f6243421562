"""Purchase order API"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.cost import CostCreate, CostResponse
from procurement.schemas.milestone import MilestoneCreate, OrderMilestoneResponse
from procurement.schemas.order import (
    OrderCreate, OrderUpdate, OrderCreated, OrderListItem, OrderFullResponse
)
from procurement.schemas.payment import PaymentCreate, PaymentResponse
from procurement.schemas.product import ProductCreate, ProductResponse
from procurement.services import orders as order_service
from procurement.services import products as product_service
from procurement.services import costs as cost_service
from procurement.services import payments as payment_service
from procurement.services import milestones as milestone_service
from procurement.services import links as link_registry
from procurement.services.currency import ExchangeRates
from procurement.services.rates import RateProvider, get_rate_provider
from procurement.services.settlement import cost_amounts, payment_amounts

from .responses import (
    build_order_list_item, build_order_full_response, build_cost_response, build_payment_response
)

router = APIRouter()


async def require_order(db: AsyncSession, order_id: str):
    order = await order_service.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/", response_model=List[OrderListItem])
async def list_orders(*, db: AsyncSession = Depends(get_db)) -> Any:
    """All orders with their totals"""
    listed = await order_service.list_orders_with_summary(db)
    return [build_order_list_item(order, summary) for order, summary in listed]


@router.post("/", response_model=OrderCreated)
async def create_order(
    *,
    db: AsyncSession = Depends(get_db),
    rate_provider: RateProvider = Depends(get_rate_provider),
    order_in: OrderCreate) -> Any:
    """Create an order; missing rates come from the live rate provider"""
    order, rates_live = await order_service.create_order(
        db, order_in.model_dump(), rate_provider=rate_provider
    )
    return OrderCreated(
        order_id=order.order_id,
        usd_rate=float(order.usd_rate),
        cny_rate=float(order.cny_rate),
        rates_live=rates_live,
    )


@router.get("/{order_id}", response_model=OrderFullResponse)
async def get_order_full(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    """Order with products, costs, payments, links, milestones and summary"""
    full = await order_service.get_order_full(db, order_id)
    if not full:
        raise HTTPException(status_code=404, detail="Order not found")
    return build_order_full_response(full)


@router.put("/{order_id}")
async def update_order(*, db: AsyncSession = Depends(get_db), order_id: str, order_in: OrderUpdate) -> Any:
    if not await order_service.update_order(db, order_id, order_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"success": True}


@router.delete("/{order_id}")
async def delete_order(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    """Delete the order and everything that belongs to it"""
    if not await order_service.delete_order(db, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"success": True}


# ===== products =====

@router.get("/{order_id}/products", response_model=List[ProductResponse])
async def list_products(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    await require_order(db, order_id)
    return await product_service.list_products(db, order_id)


@router.post("/{order_id}/products", response_model=ProductResponse)
async def add_product(*, db: AsyncSession = Depends(get_db), order_id: str, product_in: ProductCreate) -> Any:
    """Add a product; a pending payment for its total price is created with it"""
    await require_order(db, order_id)
    return await product_service.add_product(db, order_id, product_in.model_dump())


# ===== costs =====

@router.get("/{order_id}/costs", response_model=List[CostResponse])
async def list_costs(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    order = await require_order(db, order_id)
    costs = await cost_service.list_costs(db, order_id)
    links = await link_registry.cost_links_for_costs(db, [c.cost_id for c in costs])
    return [build_cost_response(c) for c in cost_amounts(costs, links, ExchangeRates.from_order(order))]


@router.post("/{order_id}/costs", response_model=CostResponse)
async def add_cost(*, db: AsyncSession = Depends(get_db), order_id: str, cost_in: CostCreate) -> Any:
    """Add a cost; a pending payment for its amount is created with it"""
    order = await require_order(db, order_id)
    cost = await cost_service.add_cost(db, order_id, cost_in.model_dump())
    return build_cost_response(cost_amounts([cost], [], ExchangeRates.from_order(order))[0])


# ===== payments =====

@router.get("/{order_id}/payments", response_model=List[PaymentResponse])
async def list_payments(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    order = await require_order(db, order_id)
    payments = await payment_service.list_payments(db, order_id)
    return [build_payment_response(p) for p in payment_amounts(payments, ExchangeRates.from_order(order))]


@router.post("/{order_id}/payments", response_model=PaymentResponse)
async def add_payment(*, db: AsyncSession = Depends(get_db), order_id: str, payment_in: PaymentCreate) -> Any:
    order = await require_order(db, order_id)
    payment = await payment_service.add_payment(db, order_id, payment_in.model_dump())
    return build_payment_response(payment_amounts([payment], ExchangeRates.from_order(order))[0])


# ===== order milestones =====

@router.get("/{order_id}/milestones", response_model=List[OrderMilestoneResponse])
async def list_order_milestones(*, db: AsyncSession = Depends(get_db), order_id: str) -> Any:
    await require_order(db, order_id)
    return await milestone_service.list_order_milestones(db, order_id)


@router.post("/{order_id}/milestones", response_model=OrderMilestoneResponse)
async def add_order_milestone(
    *, db: AsyncSession = Depends(get_db), order_id: str, milestone_in: MilestoneCreate) -> Any:
    await require_order(db, order_id)
    return await milestone_service.add_order_milestone(db, order_id, milestone_in.model_dump())
