"""
Additional (shared) cost of an order - shipping, customs, brokerage.

The cost is spread over the order's products according to
allocation_method. Without link rows it applies to every product.
"""

from sqlalchemy import Column, Integer, String, Text, DECIMAL
from procurement.db.base import Base


class AdditionalCost(Base):
    """Shared order cost"""
    __tablename__ = "additional_costs"

    id = Column(Integer, primary_key=True, index=True)
    cost_id = Column(String(50), unique=True, nullable=False, index=True, comment="Cost ID")
    order_id = Column(String(30), nullable=False, index=True, comment="Order number")

    description = Column(String(300), nullable=False, comment="Description")
    amount = Column(DECIMAL(14, 4), nullable=False, comment="Amount")
    # USD / CNY / ILS
    currency = Column(String(10), nullable=False, comment="Currency code")

    # שווה: equal
    # נפח: by volume
    # משקל: by weight
    # עלות: by product cost
    # כמות: by quantity
    allocation_method = Column(String(20), nullable=False, comment="Allocation method")

    notes = Column(Text, comment="Notes")

    def __repr__(self):
        return f"<AdditionalCost {self.cost_id}: {self.amount} {self.currency} ({self.allocation_method})>"
