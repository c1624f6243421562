"""
Delivery milestones.

A milestone type is defined once (e.g. "production done", "shipped",
"customs released") at order or product level; orders and products carry
dated milestones of those types.
"""

from sqlalchemy import Column, Integer, String, Text, Date
from procurement.db.base import Base

LEVEL_ORDER = "order"
LEVEL_PRODUCT = "product"

# Type id of milestones imported from the old free-text format
LEGACY_TYPE_ID = "legacy"


class MilestoneType(Base):
    """Milestone type"""
    __tablename__ = "milestone_types"

    id = Column(Integer, primary_key=True, index=True)
    type_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    level = Column(String(10), nullable=False, index=True, comment="product / order")
    default_order = Column(Integer, nullable=False, default=0, comment="Sort position")
    color = Column(String(20), nullable=False, default="#6b7280")


class OrderMilestone(Base):
    """Milestone of a whole order"""
    __tablename__ = "order_milestones"

    id = Column(Integer, primary_key=True, index=True)
    milestone_id = Column(String(50), unique=True, nullable=False, index=True)
    order_id = Column(String(30), nullable=False, index=True)
    milestone_type_id = Column(String(50), nullable=False)
    target_date = Column(Date)
    actual_date = Column(Date)
    status = Column(String(200))
    notes = Column(Text)


class ProductMilestone(Base):
    """Milestone of a single product"""
    __tablename__ = "product_milestones"

    id = Column(Integer, primary_key=True, index=True)
    milestone_id = Column(String(50), unique=True, nullable=False, index=True)
    product_id = Column(String(50), nullable=False, index=True)
    milestone_type_id = Column(String(50), nullable=False)
    target_date = Column(Date)
    actual_date = Column(Date)
    status = Column(String(200))
    notes = Column(Text)
