"""Shared fixtures: a fresh in-memory database per test, seeded with the demo data."""

import pytest
from httpx import ASGITransport, AsyncClient

from capnio.database import MEMORY_PATH, build_engine, build_sessionmaker, create_tables, get_db
from capnio.fixtures import demo_control_definitions, demo_forest
from capnio.main import app
from capnio.services.seed_service import seed_demo_data


@pytest.fixture
async def engine():
    """Empty schema on a private in-memory database."""
    engine = build_engine(MEMORY_PATH)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    """Session factory over the seeded database."""
    factory = build_sessionmaker(engine)
    async with factory() as session:
        await seed_demo_data(session)
    return factory


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Create test client bound to the seeded database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def forest():
    return demo_forest()


@pytest.fixture
def definitions():
    return {d.id: d for d in demo_control_definitions()}
