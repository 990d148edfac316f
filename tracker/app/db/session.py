"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support (SQLite via aiosqlite, PostgreSQL via asyncpg).
"""

from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.
    
    Pool sizing only applies to server databases; SQLite picks its own pool.
    """
    options = {"echo": echo, "future": True}
    if not database_url.startswith("sqlite"):
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return create_async_engine(database_url, **options)


# Create async engine
engine = build_engine(settings.database_url, echo=settings.db_echo)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the session factory handed to stores.
    
    Stores open one short-lived session per operation from it; the caller keeps
    ownership of the engine behind it.
    """
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Create async session factory
AsyncSessionLocal = build_session_factory(engine)

# Create declarative base for models
Base = declarative_base()


async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables registered on Base."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import Parcel  # noqa: F401
    
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
