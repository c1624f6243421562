"""
Supplier registry.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from procurement.db.base import Base


class Supplier(Base):
    """Supplier"""
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    contact_name = Column(String(100))
    email = Column(String(200))
    phone = Column(String(50))
    country = Column(String(100))
    notes = Column(Text)
    created_date = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Supplier {self.supplier_id}: {self.name}>"
