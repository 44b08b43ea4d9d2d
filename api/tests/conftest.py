"""API test configuration."""

import pytest
from api.dependencies import get_db, get_db_session_factory, get_onboarding_store_opener
from api.main import create_app
from httpx import ASGITransport, AsyncClient
from hushnote.models import Base
from hushnote.services.document_store import onboarding_store_opener
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


@pytest.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def store_opener(tmp_path):
    return onboarding_store_opener(tmp_path)


@pytest.fixture
def app(session_factory, store_opener):
    a = create_app()

    async def _override_db():
        async with session_factory() as session:
            yield session

    a.dependency_overrides[get_db] = _override_db
    a.dependency_overrides[get_db_session_factory] = lambda: session_factory
    a.dependency_overrides[get_onboarding_store_opener] = lambda: store_opener
    return a


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
