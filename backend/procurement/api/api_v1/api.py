"""V1 API router"""
from fastapi import APIRouter

from procurement.api.api_v1.endpoints import (
    orders, products, costs, payments, milestones, suppliers, rates, backup
)

api_router = APIRouter()

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(costs.router, prefix="/costs", tags=["costs"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(milestones.router, prefix="/milestones", tags=["milestones"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(rates.router, prefix="/rates", tags=["exchange rates"])
api_router.include_router(backup.router, prefix="/backup", tags=["backup"])
