"""Payment schemas"""
from datetime import date as date_type
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import CURRENCY_PATTERN, PAYMENT_STATUS_PATTERN, reject_null


class PaymentCreate(BaseModel):
    date: date_type
    amount: float = Field(..., ge=0)
    currency: str = Field(..., pattern=CURRENCY_PATTERN)
    payee: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    status: str = Field("pending", pattern=PAYMENT_STATUS_PATTERN)
    linked_product_ids: Optional[List[str]] = None
    linked_cost_ids: Optional[List[str]] = None


class PaymentUpdate(BaseModel):
    date: Optional[date_type] = None
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, pattern=CURRENCY_PATTERN)
    payee: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    status: Optional[str] = Field(None, pattern=PAYMENT_STATUS_PATTERN)

    @field_validator("date", "amount", "currency", "status")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class PaymentLinksUpdate(BaseModel):
    """Replaces all product and cost links of a payment"""
    linked_product_ids: List[str] = []
    linked_cost_ids: List[str] = []


class PaymentResponse(BaseModel):
    id: int
    payment_id: str
    order_id: str
    date: date_type
    amount: float
    currency: str
    payee: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    status: str
    status_display: str = ""
    amount_ils: float = 0

    class Config:
        from_attributes = True


class PaymentProductLinkResponse(BaseModel):
    payment_id: str
    product_id: str

    class Config:
        from_attributes = True


class PaymentCostLinkResponse(BaseModel):
    payment_id: str
    cost_id: str

    class Config:
        from_attributes = True
