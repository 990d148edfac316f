"""
Centralized Test Configuration.
"""

import random
import time

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import Base
from tracker.app.models.parcel import Parcel  # noqa: F401  (registers the table)
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate
from tracker.app.stores.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# One seed per run, printed so a failing run can be replayed
RUN_SEED = time.time_ns()


def pytest_report_header(config):
    return f"parcel tracker random seed: {RUN_SEED}"


@pytest.fixture
async def engine():
    """Fresh in-memory database with the parcel table for each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield test_engine
    
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )


# Shared session for fixture data and schema changes
@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session_factory):
    return ParcelStore(session_factory)


@pytest.fixture
def rng():
    """Random generator scoped to the test, seeded from the run seed."""
    return random.Random(RUN_SEED)


@pytest.fixture
def make_parcel():
    """Factory for test parcels; fields can be overridden per call."""
    def _make(**overrides) -> ParcelCreate:
        data = {
            "client": 1000,
            "status": ParcelStatus.REGISTERED.value,
            "address": "test",
            "created_at": "2024-01-01T00:00:00Z",
        }
        data.update(overrides)
        return ParcelCreate(**data)
    return _make
