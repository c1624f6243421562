"""
Many-to-many link rows.

Links reference business IDs, not foreign keys. Cost-product links drive
allocation; payment links only group payments for display.
"""

from sqlalchemy import Column, Integer, String, Boolean
from procurement.db.base import Base


class CostProductLink(Base):
    """Product an additional cost applies to"""
    __tablename__ = "cost_product_links"

    id = Column(Integer, primary_key=True, index=True)
    cost_id = Column(String(50), nullable=False, index=True)
    product_id = Column(String(50), nullable=False, index=True)
    is_linked = Column(Boolean, nullable=False, default=True)


class PaymentProductLink(Base):
    """Payment made for a product"""
    __tablename__ = "payment_product_links"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(String(50), nullable=False, index=True)
    product_id = Column(String(50), nullable=False, index=True)


class PaymentCostLink(Base):
    """Payment made for an additional cost"""
    __tablename__ = "payment_cost_links"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(String(50), nullable=False, index=True)
    cost_id = Column(String(50), nullable=False, index=True)
