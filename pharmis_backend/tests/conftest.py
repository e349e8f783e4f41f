# tests/conftest.py
import os
import logging
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# settings() is cached; pin test values before any pharmis_backend import reads it
os.environ.setdefault("COMPLETION_API_KEY", "test-key")
os.environ.setdefault("JWT_SECRET", "test-secret")

from pharmis_backend.config import Settings, settings as _settings
from pharmis_backend.domain.health.entities import DailyLog, LifestyleLog, MedicationLog, Symptom
from pharmis_backend.domain.insight import entities as _insight_entities  # noqa: F401
from pharmis_backend.infrastructure.db import bootstrap
from pharmis_backend.infrastructure.db.meta import Base

_settings.cache_clear()

for name in (
    "asyncio",
    "httpx",
    "sqlalchemy.pool",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
):
    logging.getLogger(name).setLevel(logging.WARNING)

# leave the application namespace free to speak at INFO
logging.getLogger("pharmis_backend").setLevel(logging.INFO)


class MockLLMService:
    """Mock completion service for testing."""

    def __init__(self, model="llama-3.3-70b-versatile"):
        self._model = model
        self.generate_response = AsyncMock()


@pytest.fixture
def mock_llm():
    return MockLLMService()


@pytest_asyncio.fixture
async def mock_repos():
    """Create mock repositories."""
    return {
        "insight_repo": AsyncMock(),
        "health_repo": AsyncMock(),
    }


def make_mock_session():
    """AsyncSession stand-in; add/expunge are synchronous on the real thing."""
    session = AsyncMock()
    session.add = MagicMock()
    session.expunge = MagicMock()
    return session


@pytest.fixture
def mock_session():
    return make_mock_session()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Real async database with a fresh schema per test.
    Uses a throwaway SQLite file unless TEST_DB_URL points at Postgres.
    """
    url = os.environ.get("TEST_DB_URL") or f"sqlite+aiosqlite:///{tmp_path / 'pharmis_test.db'}"
    await bootstrap.init_engine(Settings(db_url=url))

    async with bootstrap.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield bootstrap.engine

    async with bootstrap.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await bootstrap.dispose_engine()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """
    Function-scoped AsyncSession on the real test database.
    """
    async with bootstrap.session_scope() as session:
        yield session


def make_daily_log(user_id, day: date, mood=3, notes=None, symptoms=(), medications=()):
    log = DailyLog(user_id=user_id, date=day, mood=mood, notes=notes)
    log.symptoms = [Symptom(name=name, severity=severity) for name, severity in symptoms]
    log.medications = [MedicationLog(name=name, dosage=dosage, taken=True) for name, dosage in medications]
    return log


def make_lifestyle_log(user_id, day: date, activity_type="EXERCISE", activity_name="Walking", **extra):
    return LifestyleLog(
        user_id=user_id,
        date=day,
        activity_type=activity_type,
        activity_name=activity_name,
        **extra
    )
