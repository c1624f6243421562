"""Dependency injection (single-user deployment, no auth)"""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.db.session import SessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency. Anything not committed by the request
    is rolled back when the session closes.
    """
    async with SessionLocal() as session:
        yield session
