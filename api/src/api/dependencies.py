"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from hushnote.database import get_session_factory
from hushnote.services.document_store import StoreOpener, onboarding_store_opener
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    return get_session_factory()


def get_onboarding_store_opener() -> StoreOpener:
    return onboarding_store_opener()
