"""Additional cost schemas"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import CURRENCY_PATTERN, ALLOCATION_METHOD_PATTERN, reject_null


class CostCreate(BaseModel):
    """Create a cost. A pending payment for the amount is created with it."""
    description: str = Field(..., min_length=1, max_length=300)
    amount: float = Field(..., ge=0)
    currency: str = Field(..., pattern=CURRENCY_PATTERN)
    allocation_method: str = Field(..., pattern=ALLOCATION_METHOD_PATTERN)
    notes: Optional[str] = None


class CostUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=300)
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, pattern=CURRENCY_PATTERN)
    allocation_method: Optional[str] = Field(None, pattern=ALLOCATION_METHOD_PATTERN)
    notes: Optional[str] = None

    @field_validator("description", "amount", "currency", "allocation_method")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class CostLinksUpdate(BaseModel):
    """Replaces the linked products; an empty list applies the cost to all products"""
    linked_product_ids: List[str] = []


class CostResponse(BaseModel):
    id: int
    cost_id: str
    order_id: str
    description: str
    amount: float
    currency: str
    allocation_method: str
    notes: Optional[str] = None
    amount_ils: float = 0
    linked_product_count: int = 0

    class Config:
        from_attributes = True


class CostProductLinkResponse(BaseModel):
    cost_id: str
    product_id: str
    is_linked: bool

    class Config:
        from_attributes = True
