"""
Purchase order model - the root of every financial calculation.

An order carries the two fixed exchange rates used to convert everything
linked to it into the home currency. There is no rate history: editing a
rate changes every derived total of the order.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, DECIMAL
from procurement.db.base import Base


class PurchaseOrder(Base):
    """Purchase order"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # Format: PO-<year>-<seq>, e.g. PO-2026-007
    order_id = Column(String(30), unique=True, nullable=False, index=True, comment="Order number")
    order_name = Column(String(200), nullable=False, comment="Display name")
    supplier = Column(String(200), comment="Main supplier")

    # ILS per one unit of foreign currency
    usd_rate = Column(DECIMAL(12, 6), nullable=False, comment="USD rate")
    cny_rate = Column(DECIMAL(12, 6), nullable=False, comment="CNY rate")

    created_date = Column(DateTime, default=datetime.utcnow, comment="Created at")
    status = Column(String(50), nullable=False, index=True, comment="Status label")
    notes = Column(Text, comment="Notes")
    estimated_arrival = Column(Date, comment="Estimated arrival")

    def __repr__(self):
        return f"<PurchaseOrder {self.order_id}: {self.order_name}>"
