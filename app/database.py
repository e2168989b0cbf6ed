"""
In-memory store for the parking ledger.

All tables live in a private SQLite database held by a single shared
connection, so nothing outlives the process. Every unit of work runs inside
``session_scope()``, which holds the ledger lock until the transaction has
been committed or rolled back.
"""

import asyncio
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

DATABASE_URL = "sqlite+aiosqlite://"

Base = declarative_base()

engine = None
SessionLocal = None
_ledger_lock = None


async def init_db():
    """Create a fresh, empty store. Any previous store is discarded."""
    global engine, SessionLocal, _ledger_lock

    from app import models  # noqa: F401

    await dispose_db()

    engine = create_async_engine(
        DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    _ledger_lock = asyncio.Lock()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db():
    global engine

    if engine is not None:
        await engine.dispose()
        engine = None


@asynccontextmanager
async def session_scope():
    if SessionLocal is None:
        raise RuntimeError("Database is not initialised, call init_db() first")

    async with _ledger_lock:
        async with SessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db():
    async with session_scope() as session:
        yield session
