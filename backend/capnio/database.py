"""Async SQLAlchemy database setup."""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from capnio.config import DATABASE_PATH

MEMORY_PATH = ":memory:"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_database_url(path: str = DATABASE_PATH) -> str:
    """Get the SQLite database URL, ensuring the data directory exists."""
    if path == MEMORY_PATH:
        return "sqlite+aiosqlite://"
    db_path = Path(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path.resolve()}"


def build_engine(path: str = DATABASE_PATH) -> AsyncEngine:
    """Create an async engine; in-memory databases share a single connection."""
    if path == MEMORY_PATH:
        return create_async_engine(
            get_database_url(path),
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(get_database_url(path), echo=False)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()

async_session = build_sessionmaker(engine)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create all tables registered on Base.metadata."""
    # Register the models on the metadata before creating
    import capnio.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine = engine) -> None:
    """Drop all tables registered on Base.metadata."""
    import capnio.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_db() -> AsyncSession:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        yield session


def get_session():
    """Context manager for getting async database sessions outside of FastAPI routes."""
    return async_session()
