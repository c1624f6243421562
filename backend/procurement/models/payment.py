"""
Payment model - money owed to or sent to a payee.

Products and costs spawn a pending payment stub when they are created.
Only approved payments count as paid.
"""

from sqlalchemy import Column, Integer, String, Date, DECIMAL
from procurement.db.base import Base

PAYMENT_PENDING = "pending"
PAYMENT_APPROVED = "approved"


class Payment(Base):
    """Payment of an order"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(String(50), unique=True, nullable=False, index=True, comment="Payment ID")
    order_id = Column(String(30), nullable=False, index=True, comment="Order number")

    date = Column(Date, nullable=False, comment="Payment date")
    amount = Column(DECIMAL(14, 4), nullable=False, comment="Amount")
    currency = Column(String(10), nullable=False, comment="Currency code")

    payee = Column(String(200), comment="Payee")
    description = Column(String(300), comment="Description")
    reference = Column(String(100), comment="Bank / invoice reference")

    # pending: not yet confirmed
    # approved: money actually moved
    status = Column(String(20), nullable=False, default=PAYMENT_PENDING, index=True, comment="Status")

    def __repr__(self):
        return f"<Payment {self.payment_id}: {self.amount} {self.currency} ({self.status})>"

    @property
    def is_approved(self) -> bool:
        return self.status == PAYMENT_APPROVED

    @property
    def status_display(self) -> str:
        status_map = {
            PAYMENT_PENDING: "ממתין",
            PAYMENT_APPROVED: "אושר",
        }
        return status_map.get(self.status, self.status)
