# pharmis_backend/infrastructure/db/bootstrap.py
"""
Async engine / session lifecycle.

`init_engine` must run once at start-up (FastAPI lifespan, scripts) before
`get_session` or `session_scope` are used.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pharmis_backend.config import Settings

logger = logging.getLogger(__name__)

engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


async def init_engine(cfg: Settings) -> None:
    """Create the process-wide engine and session factory (idempotent)."""
    global engine, SessionLocal
    if engine is not None:
        return
    engine = create_async_engine(cfg.db_url, echo=cfg.db_echo, pool_pre_ping=True)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    logger.info("Database engine initialised")


async def dispose_engine() -> None:
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if SessionLocal is None:
        raise RuntimeError("init_engine() has not been called")
    async with SessionLocal() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Session for background work and scripts; rolls back on error."""
    if SessionLocal is None:
        raise RuntimeError("init_engine() has not been called")
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
