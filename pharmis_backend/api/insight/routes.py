# pharmis_backend/api/insight/routes.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID
import logging

from pharmis_backend.config import settings
from pharmis_backend.domain.insight.entities import InsightCategory
from pharmis_backend.domain.insight.errors import InvalidDateFormat
from pharmis_backend.services.insight.service import InsightService
from pharmis_backend.dependencies import (
    get_session,
    get_insight_service,
    get_current_user_id,
)
from .schemas import InsightRead, InsightGenerateRequest, InsightHistory, InsightList

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/insights",
    tags=["insights"]
)


@router.get("", response_model=InsightList)
async def list_insights(
    category: Optional[InsightCategory] = Query(None),
    days: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_session),
    insight_service: InsightService = Depends(get_insight_service),
    user_id: UUID = Depends(get_current_user_id)
):
    """Stored insights for the last `days` days, optionally one category. Nothing is generated."""
    cfg = settings()
    window_days = min(days or cfg.insight_list_default_days, cfg.insight_list_max_days)
    try:
        insights = await insight_service.list_insights(
            user_id=user_id,
            days=window_days,
            session=session,
            category=category,
        )
        return InsightList(
            insights=[InsightRead.model_validate(insight) for insight in insights],
            total_count=len(insights),
            days=window_days,
            category=category.value if category else None
        )
    except Exception as e:
        logger.error(f"Error listing insights for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list insights"
        )


@router.get("/history", response_model=InsightHistory)
async def get_insight_history(
    days: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_session),
    insight_service: InsightService = Depends(get_insight_service),
    user_id: UUID = Depends(get_current_user_id)
):
    """Insights for the user's most recent log days, generating missing ones."""
    cfg = settings()
    window_days = min(days or cfg.insight_history_default_days, cfg.insight_history_max_days)
    try:
        logger.info(f"[insights] history: user={user_id} days={window_days}")
        insights = await insight_service.list_insights_history(
            user_id=user_id,
            window_days=window_days,
            session=session,
            timeout_s=cfg.insight_history_timeout_s,
        )
        return InsightHistory(
            insights=[InsightRead.model_validate(insight) for insight in insights],
            total_count=len(insights),
            days=window_days
        )
    except Exception as e:
        logger.error(f"Error fetching insight history for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve insight history"
        )


@router.get("/latest", response_model=Optional[InsightRead])
async def get_latest_insight(
    session: AsyncSession = Depends(get_session),
    insight_service: InsightService = Depends(get_insight_service),
    user_id: UUID = Depends(get_current_user_id)
):
    """Today's stored insight, or null when none has been generated yet."""
    try:
        insight = await insight_service.get_latest_insight(user_id, session)
        return InsightRead.model_validate(insight) if insight else None
    except Exception as e:
        logger.error(f"Error fetching latest insight for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve latest insight"
        )


@router.post("/generate", response_model=InsightRead)
async def generate_insight(
    request: InsightGenerateRequest,
    session: AsyncSession = Depends(get_session),
    insight_service: InsightService = Depends(get_insight_service),
    user_id: UUID = Depends(get_current_user_id)
):
    """Return (or generate) the insight for the requested day."""
    return await _get_or_generate(request.date, session, insight_service, user_id)


@router.get("/{target_date}", response_model=InsightRead)
async def get_insight_for_date(
    target_date: str,
    session: AsyncSession = Depends(get_session),
    insight_service: InsightService = Depends(get_insight_service),
    user_id: UUID = Depends(get_current_user_id)
):
    """Return (or generate) the insight for `target_date` (YYYY-MM-DD)."""
    return await _get_or_generate(target_date, session, insight_service, user_id)


async def _get_or_generate(
    target_date: str,
    session: AsyncSession,
    insight_service: InsightService,
    user_id: UUID,
) -> InsightRead:
    try:
        logger.info(f"[insights] get-or-generate: user={user_id} date={target_date}")
        insight = await insight_service.get_or_generate_insight(user_id, target_date, session)
        return InsightRead.model_validate(insight)
    except InvalidDateFormat as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating insight for user {user_id} on {target_date}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate insight"
        )
