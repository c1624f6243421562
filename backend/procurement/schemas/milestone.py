"""Milestone schemas"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import MILESTONE_LEVEL_PATTERN, reject_null


# ===== milestone types =====
class MilestoneTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: str = Field(..., pattern=MILESTONE_LEVEL_PATTERN)
    default_order: int = 0
    color: str = Field("#6b7280", max_length=20)


class MilestoneTypeSeed(MilestoneTypeCreate):
    """Create with a fixed id; existing ids are left untouched"""
    type_id: str = Field(..., min_length=1, max_length=50)


class MilestoneTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    default_order: Optional[int] = None
    color: Optional[str] = Field(None, max_length=20)

    @field_validator("name", "default_order", "color")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class MilestoneTypeResponse(BaseModel):
    type_id: str
    name: str
    level: str
    default_order: int
    color: str

    class Config:
        from_attributes = True


# ===== order / product milestones =====
class MilestoneCreate(BaseModel):
    milestone_type_id: str = Field(..., min_length=1, max_length=50)
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class MilestoneUpdate(BaseModel):
    milestone_type_id: Optional[str] = Field(None, min_length=1, max_length=50)
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("milestone_type_id")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class LegacyMilestoneCreate(BaseModel):
    """Old free-text milestone; becomes a product milestone when product_id is set"""
    order_id: str
    product_id: Optional[str] = None
    description: str
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    notes: Optional[str] = None


class OrderMilestoneResponse(BaseModel):
    milestone_id: str
    order_id: str
    milestone_type_id: str
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class ProductMilestoneResponse(BaseModel):
    milestone_id: str
    product_id: str
    milestone_type_id: str
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
