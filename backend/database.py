"""
Database connection -- PostgreSQL (asyncpg) in production, SQLite locally.

Env vars (set in deployment Variables or .env):
    DATABASE_URL  -- full postgres:// connection string
    DATABASE_URL_FALLBACK -- optional sqlite+aiosqlite:///./local.db for local dev
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

import config_env


def normalize_database_url(raw_url: str, fallback: str) -> str:
    """Hosted Postgres hands out postgres:// but asyncpg needs postgresql+asyncpg://."""
    if not raw_url:
        return fallback
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if raw_url.startswith("postgresql://"):
        return raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return raw_url


DATABASE_URL = normalize_database_url(
    config_env.DATABASE_URL, config_env.DATABASE_URL_FALLBACK
)


class Base(DeclarativeBase):
    pass


def make_engine(url: str = DATABASE_URL) -> AsyncEngine:
    return create_async_engine(url, echo=config_env.DATABASE_ECHO)


def make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = make_engine()
async_session = make_sessionmaker(engine)


async def init_db(bind: AsyncEngine = engine):
    """Create all tables (safe to call multiple times)."""
    from backend import models  # noqa: F401  -- register tables on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
