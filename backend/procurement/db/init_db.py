import asyncio

from procurement.db.session import engine
from procurement.db.base import Base

# Register every table on Base.metadata
from procurement.models import (  # noqa: F401
    PurchaseOrder, Product, AdditionalCost, CostProductLink,
    Payment, PaymentProductLink, PaymentCostLink,
    MilestoneType, OrderMilestone, ProductMilestone, Supplier,
)


async def ensure_tables_exist() -> None:
    """
    Create missing tables (called on application startup)
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


if __name__ == "__main__":
    asyncio.run(ensure_tables_exist())
