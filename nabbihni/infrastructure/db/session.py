"""
Database session management (SQLAlchemy asyncio)
"""
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from nabbihni.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def get_engine() -> AsyncEngine:
    """Get or create async SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _SessionLocal


@asynccontextmanager
async def session_scope(session_factory: async_sessionmaker[AsyncSession]):
    """
    Session that commits on success and rolls back on error

    Usage:
        async with session_scope(factory) as session:
            session.add(row)
    """
    session = session_factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_models(engine: AsyncEngine | None = None) -> None:
    """Create tables (dev/test; production uses Alembic migrations)"""
    # registers the mapped tables on Base.metadata
    from nabbihni.infrastructure.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_db_connection() -> None:
    """
    Health check - run SELECT 1

    Raises:
        sqlalchemy.exc.OperationalError: if the database is unreachable
    """
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))
