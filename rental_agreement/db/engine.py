"""Async SQLAlchemy engine and session factory."""

from __future__ import annotations

from pathlib import Path
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rental_agreement.config import get_settings

_settings = get_settings()

if _settings.database_url.startswith("sqlite+aiosqlite:///") and ":memory:" not in _settings.database_url:
    _db_path = _settings.database_url.replace("sqlite+aiosqlite:///", "")
    Path(_db_path).parent.mkdir(parents=True, exist_ok=True)

engine = create_async_engine(_settings.database_url, echo=False)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """FastAPI dependency that yields an async DB session."""
    async with async_session_factory() as session:
        yield session


async def create_tables():
    """Create all tables on the configured database."""
    from rental_agreement.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
