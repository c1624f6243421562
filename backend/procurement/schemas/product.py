"""Product schemas"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import reject_null


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    supplier: Optional[str] = None
    quantity: float = Field(..., ge=0)
    price_per_unit: float = Field(0, ge=0)
    price_total: float = Field(0, ge=0)
    currency: str = Field("USD", min_length=1, max_length=10)
    cbm_per_unit: float = Field(0, ge=0)
    cbm_total: float = Field(0, ge=0)
    kg_per_unit: float = Field(0, ge=0)
    kg_total: float = Field(0, ge=0)
    order_date: Optional[date] = None
    notes: Optional[str] = None


class ProductCreate(ProductBase):
    """Create a product. A pending payment for price_total is created with it."""
    pass


class ProductUpdate(BaseModel):
    """Partial update; the pending payment stub is not adjusted"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    supplier: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    price_per_unit: Optional[float] = Field(None, ge=0)
    price_total: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=1, max_length=10)
    cbm_per_unit: Optional[float] = Field(None, ge=0)
    cbm_total: Optional[float] = Field(None, ge=0)
    kg_per_unit: Optional[float] = Field(None, ge=0)
    kg_total: Optional[float] = Field(None, ge=0)
    order_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("name", "quantity", "price_per_unit", "price_total", "currency",
                     "cbm_per_unit", "cbm_total", "kg_per_unit", "kg_total")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class ProductResponse(ProductBase):
    id: int
    product_id: str
    order_id: str

    class Config:
        from_attributes = True


class ProductWithCostsResponse(ProductResponse):
    price_ils: float = 0
    additional_costs_ils: float = 0
    final_cost_ils: float = 0
    final_cost_per_unit_ils: float = 0
