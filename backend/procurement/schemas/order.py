"""Purchase order schemas"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import reject_null
from procurement.schemas.product import ProductWithCostsResponse
from procurement.schemas.cost import CostResponse, CostProductLinkResponse
from procurement.schemas.payment import (
    PaymentResponse, PaymentProductLinkResponse, PaymentCostLinkResponse
)
from procurement.schemas.milestone import (
    MilestoneTypeResponse, OrderMilestoneResponse, ProductMilestoneResponse
)


class OrderCreate(BaseModel):
    """Create an order. Rates left out are taken from the rate provider."""
    order_name: str = Field(..., min_length=1, max_length=200)
    supplier: Optional[str] = None
    usd_rate: Optional[float] = Field(None, gt=0, description="ILS per USD")
    cny_rate: Optional[float] = Field(None, gt=0, description="ILS per CNY")
    status: Optional[str] = None
    notes: Optional[str] = None
    estimated_arrival: Optional[date] = None


class OrderUpdate(BaseModel):
    order_name: Optional[str] = Field(None, min_length=1, max_length=200)
    supplier: Optional[str] = None
    usd_rate: Optional[float] = Field(None, gt=0)
    cny_rate: Optional[float] = Field(None, gt=0)
    status: Optional[str] = None
    notes: Optional[str] = None
    estimated_arrival: Optional[date] = None

    @field_validator("order_name", "usd_rate", "cny_rate", "status")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class OrderCreated(BaseModel):
    order_id: str
    usd_rate: float
    cny_rate: float
    rates_live: bool = False  # whether the rates came from the live provider


class OrderResponse(BaseModel):
    id: int
    order_id: str
    order_name: str
    supplier: Optional[str] = None
    usd_rate: float
    cny_rate: float
    created_date: Optional[datetime] = None
    status: str
    notes: Optional[str] = None
    estimated_arrival: Optional[date] = None

    class Config:
        from_attributes = True


class OrderSummaryResponse(BaseModel):
    """Order totals in ILS"""
    product_count: int = 0
    total_products_ils: float = 0
    total_costs_ils: float = 0
    total_order_ils: float = 0
    total_paid_ils: float = 0
    balance_ils: float = 0
    total_cbm: float = 0
    total_kg: float = 0


class OrderListItem(OrderResponse):
    """Order with its totals, for the order list"""
    product_count: int = 0
    total_products_ils: float = 0
    total_costs_ils: float = 0
    total_order_ils: float = 0
    total_paid_ils: float = 0
    balance_ils: float = 0


class OrderFullResponse(BaseModel):
    """Everything about one order with all computed figures"""
    order: OrderResponse
    products: List[ProductWithCostsResponse] = []
    costs: List[CostResponse] = []
    payments: List[PaymentResponse] = []
    links: List[CostProductLinkResponse] = []
    payment_product_links: List[PaymentProductLinkResponse] = []
    payment_cost_links: List[PaymentCostLinkResponse] = []
    order_milestones: List[OrderMilestoneResponse] = []
    product_milestones: List[ProductMilestoneResponse] = []
    milestone_types: List[MilestoneTypeResponse] = []
    summary: OrderSummaryResponse
