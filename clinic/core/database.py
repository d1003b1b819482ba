"""Database engine and session helpers for the calendar session store."""

from collections.abc import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import settings

ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def resolve_async_database_url(raw_url: str) -> str:
    """Rewrite DATABASE_URL so it always names an async driver."""
    url = make_url(raw_url)
    backend = url.drivername.lower().split("+", 1)[0]
    target_driver = ASYNC_DRIVERS.get(backend)
    if target_driver is None:
        raise ValueError(
            f"Unsupported database dialect '{url.drivername}'. "
            "Calendar sessions can be stored in PostgreSQL (asyncpg) or SQLite (aiosqlite)."
        )
    if url.drivername.lower() == target_driver:
        return raw_url
    return url.set(drivername=target_driver).render_as_string(hide_password=False)


class Base(DeclarativeBase):
    """Declarative base for the session store tables."""


engine = create_async_engine(
    resolve_async_database_url(settings.database_url),
    echo=settings.debug,
)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async session."""
    async with AsyncSessionLocal() as session:
        yield session
