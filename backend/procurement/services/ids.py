"""Business identifiers"""

import secrets
import string
import time
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.models.order import PurchaseOrder

_ALPHABET = string.digits + string.ascii_lowercase

PRODUCT_PREFIX = "PROD"
COST_PREFIX = "COST"
PAYMENT_PREFIX = "PAY"
SUPPLIER_PREFIX = "SUP"
ORDER_MILESTONE_PREFIX = "OMS"
PRODUCT_MILESTONE_PREFIX = "PMS"
MILESTONE_TYPE_PREFIX = "MST"


def generate_id(prefix: str) -> str:
    """PREFIX-<epoch ms>-<7 random base36 chars>"""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(7))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


async def generate_order_id(db: AsyncSession, year: int = None) -> str:
    """Next PO-<year>-<seq> number; the sequence restarts every year"""
    year = year or datetime.now().year
    prefix = f"PO-{year}-"

    result = await db.execute(
        select(PurchaseOrder.order_id).where(PurchaseOrder.order_id.like(f"{prefix}%"))
    )
    seq = 0
    for order_id in result.scalars().all():
        try:
            seq = max(seq, int(order_id[len(prefix):]))
        except ValueError:
            continue

    return f"{prefix}{seq + 1:03d}"
