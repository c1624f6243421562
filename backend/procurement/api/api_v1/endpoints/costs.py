"""Additional cost API"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.deps import get_db
from procurement.schemas.cost import (
    CostUpdate, CostLinksUpdate, CostResponse, CostProductLinkResponse
)
from procurement.services import costs as cost_service
from procurement.services import orders as order_service
from procurement.services import links as link_registry
from procurement.services.currency import ExchangeRates
from procurement.services.settlement import cost_amounts

from .responses import build_cost_response

router = APIRouter()


@router.get("/{cost_id}", response_model=CostResponse)
async def get_cost(*, db: AsyncSession = Depends(get_db), cost_id: str) -> Any:
    cost = await cost_service.get_cost(db, cost_id)
    if not cost:
        raise HTTPException(status_code=404, detail="Cost not found")
    order = await order_service.get_order(db, cost.order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    links = await link_registry.cost_links_for_costs(db, [cost_id])
    return build_cost_response(cost_amounts([cost], links, ExchangeRates.from_order(order))[0])


@router.put("/{cost_id}")
async def update_cost(*, db: AsyncSession = Depends(get_db), cost_id: str, cost_in: CostUpdate) -> Any:
    if not await cost_service.update_cost(db, cost_id, cost_in.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="Cost not found")
    return {"success": True}


@router.delete("/{cost_id}")
async def delete_cost(*, db: AsyncSession = Depends(get_db), cost_id: str) -> Any:
    """Delete a cost; its pending payment goes too, approved ones stay"""
    if not await cost_service.delete_cost(db, cost_id):
        raise HTTPException(status_code=404, detail="Cost not found")
    return {"success": True}


@router.get("/{cost_id}/links", response_model=List[CostProductLinkResponse])
async def get_cost_links(*, db: AsyncSession = Depends(get_db), cost_id: str) -> Any:
    return await link_registry.cost_links_for_costs(db, [cost_id])


@router.put("/{cost_id}/links")
async def set_cost_links(*, db: AsyncSession = Depends(get_db), cost_id: str, links_in: CostLinksUpdate) -> Any:
    """Replace the linked products; an empty list applies the cost to all products"""
    if not await cost_service.set_cost_product_links(db, cost_id, links_in.linked_product_ids):
        raise HTTPException(status_code=404, detail="Cost not found")
    return {"success": True}
