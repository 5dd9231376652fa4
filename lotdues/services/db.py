"""Database connection and session management."""

import logging
import os
from typing import AsyncGenerator, Optional

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lotdues.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./lotdues.db"


def to_async_url(database_url: str) -> str:
    """Map a sync SQLAlchemy URL to its async driver equivalent.

    Args:
        database_url: Sync URL (e.g. "sqlite:///./lotdues.db")

    Returns:
        URL usable by create_async_engine
    """
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def build_engine(database_url: str) -> Engine:
    """Create a sync engine (SQLite uses StaticPool for simplicity in dev/test)."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def build_async_engine(database_url: str) -> AsyncEngine:
    """Create an async engine for the given sync or async URL."""
    async_url = to_async_url(database_url)
    if async_url.startswith("sqlite"):
        return create_async_engine(
            async_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(async_url, pool_pre_ping=True)


# Default engines from environment (.env in the working directory included);
# entry points rebind them to the loaded configuration with init_engines()
load_dotenv(find_dotenv(usecwd=True))
DATABASE_URL = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL

engine = build_engine(DATABASE_URL)
async_engine = build_async_engine(DATABASE_URL)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def init_engines(database_url: str) -> None:
    """Point the module engines and session factory at a database.

    AsyncSessionLocal keeps its identity, so modules that imported it
    open sessions on the new engine.

    Args:
        database_url: Sync SQLAlchemy URL (e.g. AppConfig.database_url)
    """
    global DATABASE_URL, engine, async_engine

    if database_url == DATABASE_URL:
        return

    engine.dispose()
    DATABASE_URL = database_url
    engine = build_engine(database_url)
    async_engine = build_async_engine(database_url)
    AsyncSessionLocal.configure(bind=async_engine)
    logger.info(f"Database engines bound to {database_url}")


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet.

    Args:
        bind: Engine to create tables on (default: module engine)
    """
    Base.metadata.create_all(bind if bind is not None else engine)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async with AsyncSessionLocal() as session:
        yield session


__all__ = [
    "DATABASE_URL",
    "engine",
    "async_engine",
    "AsyncSessionLocal",
    "build_engine",
    "build_async_engine",
    "to_async_url",
    "init_engines",
    "init_db",
    "get_async_session",
]
