"""
Product line of a purchase order.

Per-unit and total fields are stored independently. Callers recompute
the total when they edit the per-unit value; calculations trust the
stored totals as they are.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DECIMAL
from procurement.db.base import Base


class Product(Base):
    """Product bought within an order"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(String(50), unique=True, nullable=False, index=True, comment="Product ID")
    order_id = Column(String(30), nullable=False, index=True, comment="Order number")

    name = Column(String(200), nullable=False, comment="Product name")
    supplier = Column(String(200), index=True, comment="Supplier name")

    quantity = Column(DECIMAL(14, 4), nullable=False, default=0, comment="Quantity")

    # Price in the product's own currency
    price_per_unit = Column(DECIMAL(14, 4), nullable=False, default=0, comment="Unit price")
    price_total = Column(DECIMAL(14, 4), nullable=False, default=0, comment="Total price")
    currency = Column(String(10), nullable=False, default="USD", comment="Currency code")

    # Volume (CBM) and weight (KG)
    cbm_per_unit = Column(DECIMAL(14, 4), nullable=False, default=0, comment="CBM per unit")
    cbm_total = Column(DECIMAL(14, 4), nullable=False, default=0, comment="Total CBM")
    kg_per_unit = Column(DECIMAL(14, 4), nullable=False, default=0, comment="KG per unit")
    kg_total = Column(DECIMAL(14, 4), nullable=False, default=0, comment="Total KG")

    order_date = Column(Date, comment="Ordered on")
    notes = Column(Text, comment="Notes")

    def __repr__(self):
        return f"<Product {self.product_id}: {self.name} x{self.quantity}>"
