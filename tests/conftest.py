"""
Pytest fixtures for testing
"""
import asyncio
from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from nabbihni.domain.clock import FixedClock
from nabbihni.infrastructure.db.countdown_store import CountdownStore
from nabbihni.infrastructure.db.session import init_models


def _make_engine(db_path):
    # NullPool: no connection outlives the event loop that opened it
    return create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)


@pytest.fixture
def reference_now():
    """Sunday 2026-10-18 10:00 reference time"""
    return datetime(2026, 10, 18, 10, 0, 0)


@pytest.fixture
def clock(reference_now):
    return FixedClock(reference_now)


@pytest.fixture
async def db_engine(tmp_path):
    """SQLite file database with all tables created"""
    engine = _make_engine(tmp_path / "test.db")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def store(session_factory, clock) -> CountdownStore:
    return CountdownStore(session_factory, clock)


@pytest.fixture
def sync_session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Session factory for TestClient tests (tables created outside any test loop)"""
    engine = _make_engine(tmp_path / "api.db")
    asyncio.run(init_models(engine))
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())
