"""Supplier schemas"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from procurement.schemas.common import reject_null


class SupplierBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None


class SupplierCreate(SupplierBase):
    pass


class SupplierSeed(SupplierBase):
    """Import with a fixed id; existing ids are left untouched"""
    supplier_id: str = Field(..., min_length=1, max_length=50)
    created_date: Optional[datetime] = None


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class SupplierResponse(SupplierBase):
    supplier_id: str
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True
