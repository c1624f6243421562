"""
Shared fixtures: a fresh SQLite file per test, an async session on it,
and the reference order used across the tests.
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from procurement.db.base import Base
import procurement.models  # noqa: F401  registers every table
from procurement.services import orders as order_service
from procurement.services import products as product_service
from procurement.services.rates import RateProvider


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def offline_provider():
    """Rate provider whose upstream always fails"""
    def handler(request):
        return httpx.Response(503)
    return RateProvider(url="http://rates.test/", transport=httpx.MockTransport(handler))


@pytest.fixture
async def order(db):
    order, _ = await order_service.create_order(
        db, {"order_name": "Container 1", "supplier": "Ningbo Tools", "usd_rate": 3.76, "cny_rate": 0.52}
    )
    return order


@pytest.fixture
async def two_products(db, order):
    """Product A ($100, 2 CBM, 10 units) and product B ($200, 8 CBM, 5 units)"""
    a = await product_service.add_product(db, order.order_id, {
        "name": "A", "supplier": "Ningbo Tools", "quantity": 10,
        "price_per_unit": 10, "price_total": 100, "currency": "USD",
        "cbm_total": 2, "kg_total": 50,
    })
    b = await product_service.add_product(db, order.order_id, {
        "name": "B", "supplier": "Shenzhen Parts", "quantity": 5,
        "price_per_unit": 40, "price_total": 200, "currency": "USD",
        "cbm_total": 8, "kg_total": 150,
    })
    return a, b
