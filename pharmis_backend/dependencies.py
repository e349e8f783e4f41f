# pharmis_backend/dependencies.py

"""
Centralised FastAPI dependency providers.

Lifetimes
---------
* module-level singletons → created once at import time
* request-scoped objects  → yielded by functions that FastAPI wraps
"""

from __future__ import annotations

from typing import AsyncGenerator
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.config import settings
from pharmis_backend.infrastructure.db.bootstrap import get_session as get_db_session
from pharmis_backend.infrastructure.implementations.health.rds_health_repository import RDSHealthRecordRepository
from pharmis_backend.infrastructure.implementations.insight.rds_insight_repository import RDSInsightRepository
from pharmis_backend.infrastructure.llm.openai_llm import OpenAILLM
from pharmis_backend.context.insight import InsightContextBuilder
from pharmis_backend.services.insight.service import InsightGenerationConfig, InsightService

# ────────────────────────── singletons ─────────────────────────── #

_health_repo = RDSHealthRecordRepository()
_insight_repo = RDSInsightRepository()
_llm = OpenAILLM(
    api_key=settings().completion_api_key,
    model=settings().completion_model,
    base_url=settings().completion_base_url,
    timeout_s=settings().completion_timeout_s,
)
_insight_context_builder = InsightContextBuilder(_health_repo)
_insight_service = InsightService(
    _insight_repo,
    _health_repo,
    _llm,
    config=InsightGenerationConfig(
        temperature=settings().completion_temperature,
        max_tokens=settings().completion_max_tokens,
    ),
    context_builder=_insight_context_builder,
)

# ─────────────────────── DI provider helpers ───────────────────── #

def get_insight_service() -> InsightService:
    """Return the singleton InsightService."""
    return _insight_service

# ───────────────────────── auth helpers ───────────────────────── #
_security = HTTPBearer()

async def get_current_user_id(token: HTTPAuthorizationCredentials = Depends(_security)) -> UUID:
    """Return the user id carried in the bearer JWT (`uid`, falling back to `sub`)."""
    try:
        payload = jwt.decode(token.credentials, settings().jwt_secret, algorithms=[settings().jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    raw_id = payload.get("uid") or payload.get("sub")
    try:
        return UUID(str(raw_id))
    except ValueError:
        raise HTTPException(status_code=401, detail="Unknown user")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped database session (async).

    Delegates to *pharmis_backend.infrastructure.db.bootstrap.get_session* but
    preserves the required *async generator* signature so FastAPI can manage
    the lifecycle automatically (open → yield → close).
    """
    async for session in get_db_session():
        yield session
