"""Insight context builder orchestrates the health record providers."""

import logging
from datetime import date
from typing import Dict, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.health.repo import HealthRecordRepository
from .context_window import InsightContextWindow, window_bounds
from .prompts import InsightPrompts
from .providers import DailyLogProvider, LifestyleLogProvider

logger = logging.getLogger(__name__)


class InsightContextBuilder:
    """Builds the trailing 7-day context for one user and day."""

    def __init__(self, health_repo: HealthRecordRepository):
        self._daily_provider = DailyLogProvider(health_repo)
        self._lifestyle_provider = LifestyleLogProvider(health_repo)

    async def build_for_date(
        self,
        user_id: UUID,
        target_date: date,
        session: AsyncSession
    ) -> InsightContextWindow:
        window_start, window_end = window_bounds(target_date)
        logger.debug(f"Building insight context for user {user_id}: {window_start} .. {window_end}")

        # Sequential on purpose: both queries share one AsyncSession
        daily_logs = await self._daily_provider.get_daily_logs(
            user_id, window_start, window_end, session
        )
        lifestyle_logs = await self._lifestyle_provider.get_lifestyle_logs(
            user_id, window_start, window_end, session
        )

        return InsightContextWindow(
            user_id=str(user_id),
            target_date=target_date,
            window_start=window_start,
            daily_logs=daily_logs,
            lifestyle_logs=lifestyle_logs,
        )

    def prepare_llm_messages(self, context_window: InsightContextWindow) -> List[Dict[str, str]]:
        return context_window.to_llm_messages(InsightPrompts.daily_insight_system())
