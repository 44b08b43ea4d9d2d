"""Shared fixtures for onboarding persistence tests."""

from typing import Any

import pytest
from hushnote.errors import StoreFlushError, StoreUnavailableError, StoreWriteError
from hushnote.models import Base
from hushnote.services.document_store import onboarding_store_opener
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


class FakeStore:
    """In-memory document store with switchable write and flush failures."""

    def __init__(self, name: str = "onboarding-status.json") -> None:
        self.name = name
        self.data: dict[str, Any] = {}
        self.fail_set = False
        self.fail_save = False
        self.save_count = 0

    def get(self, key):
        return self.data.get(key)

    def has(self, key):
        return key in self.data

    def set(self, key, value):
        if self.fail_set:
            raise StoreWriteError(f"disk quota exceeded writing {key}")
        self.data[key] = value

    def delete(self, key):
        if key not in self.data:
            return False
        del self.data[key]
        return True

    def save(self):
        if self.fail_save:
            raise StoreFlushError("Failed to save store to disk: read-only filesystem")
        self.save_count += 1


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_opener(fake_store):
    return lambda: fake_store


@pytest.fixture
def broken_opener():
    def _open():
        raise StoreUnavailableError("onboarding-status.json", "permission denied")

    return _open


@pytest.fixture
def file_opener(tmp_path):
    return onboarding_store_opener(tmp_path)


@pytest.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()
