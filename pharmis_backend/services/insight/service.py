"""Insight pipeline: one cached, model-generated health insight per user per day.

Persistence goes through InsightRepository / HealthRecordRepository and the
model call through the LLMService port. Idempotency is keyed on
(user_id, generated_date); the unique constraint behind `save_insight` settles
concurrent writers.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.context.insight import InsightContextBuilder, NO_INSIGHT_PHRASE
from pharmis_backend.domain.insight.entities import HealthInsight, InsightCategory
from pharmis_backend.domain.insight.errors import CompletionServiceError, StoreWriteConflict
from pharmis_backend.domain.insight.repo import InsightRepository
from pharmis_backend.domain.health.repo import HealthRecordRepository
from pharmis_backend.domain.ports.llm import LLMService
from .dates import parse_calendar_date
from .extractor import classify_category, extract_actionable_insight

logger = logging.getLogger(__name__)

NO_DATA_TITLE = "No Health Data"
NO_DATA_CONTENT = "No health or lifestyle data was logged for this day."
NO_ACTIONABLE_TITLE = "No Actionable Insight"
NO_ACTIONABLE_CONTENT = NO_INSIGHT_PHRASE


@dataclass(frozen=True)
class InsightGenerationConfig:
    temperature: float = 0.7
    max_tokens: int = 500


class InsightService:
    """Orchestrates lookup, windowing, completion, extraction and storage."""

    def __init__(
        self,
        insight_repo: InsightRepository,
        health_repo: HealthRecordRepository,
        llm_service: LLMService,
        config: Optional[InsightGenerationConfig] = None,
        context_builder: Optional[InsightContextBuilder] = None,
    ) -> None:
        self._insight_repo = insight_repo
        self._health_repo = health_repo
        self._llm = llm_service
        self._config = config or InsightGenerationConfig()
        self._context_builder = context_builder or InsightContextBuilder(health_repo)

    # ───────────────────────────── single day ───────────────────────────── #

    async def get_or_generate_insight(
        self,
        user_id: UUID,
        target_date: Union[str, date],
        session: AsyncSession,
        surface_errors: bool = False,
    ) -> HealthInsight:
        """Return the stored insight for `target_date`, generating it first if needed.

        With `surface_errors` a failing completion call raises
        CompletionServiceError instead of storing the fallback record.
        """
        day = parse_calendar_date(target_date)

        existing = await self._insight_repo.find_insight(user_id, day, session)
        if existing:
            logger.debug(f"Insight for user {user_id} on {day} already exists")
            return existing

        context_window = await self._context_builder.build_for_date(user_id, day, session)
        logger.info(
            f"Insight context for user {user_id} on {day}: "
            f"{len(context_window.daily_logs)} daily, {len(context_window.lifestyle_logs)} lifestyle logs, "
            f"~{context_window.estimate_tokens()} tokens"
        )

        if context_window.is_empty():
            return await self._store(
                HealthInsight(
                    user_id=user_id,
                    title=NO_DATA_TITLE,
                    content=NO_DATA_CONTENT,
                    category=InsightCategory.GENERAL.value,
                    generated_date=day,
                ),
                session,
            )

        messages = self._context_builder.prepare_llm_messages(context_window)
        try:
            raw_text = await self._llm.generate_response(
                messages,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
            logger.debug(f"Raw completion for user {user_id} on {day}: {len(raw_text)} chars")
        except CompletionServiceError as e:
            if surface_errors:
                raise
            logger.warning(f"Completion failed for user {user_id} on {day}, storing fallback: {e}")
            raw_text = None

        actionable = extract_actionable_insight(raw_text)
        if actionable is None:
            logger.info(f"No actionable insight for user {user_id} on {day}")
            return await self._store(
                HealthInsight(
                    user_id=user_id,
                    title=NO_ACTIONABLE_TITLE,
                    content=NO_ACTIONABLE_CONTENT,
                    category=InsightCategory.GENERAL.value,
                    generated_date=day,
                ),
                session,
            )

        category = classify_category(f"{actionable.title}: {actionable.content}")
        insight = HealthInsight(
            user_id=user_id,
            title=actionable.title,
            content=actionable.content,
            category=category.value,
            generated_date=day,
        )
        stored = await self._store(insight, session)
        logger.info(f"Generated {category.value} insight for user {user_id} on {day}")
        return stored

    async def get_latest_insight(
        self,
        user_id: UUID,
        session: AsyncSession,
        today: Optional[date] = None,
    ) -> Optional[HealthInsight]:
        """Stored insight for today (or `today`), without generating one."""
        return await self._insight_repo.find_insight(user_id, today or date.today(), session)

    async def list_insights(
        self,
        user_id: UUID,
        days: int,
        session: AsyncSession,
        category: Optional[InsightCategory] = None,
        today: Optional[date] = None,
    ) -> List[HealthInsight]:
        """Stored insights from the last `days` days, newest first. Never generates."""
        since = (today or date.today()) - timedelta(days=days)
        insights = await self._insight_repo.list_insights(user_id, since, session, category=category)
        logger.debug(
            f"Listed {len(insights)} insights for user {user_id} since {since}"
            f"{f' in {category.value}' if category else ''}"
        )
        return insights

    # ─────────────────────────────── history ────────────────────────────── #

    async def list_insights_history(
        self,
        user_id: UUID,
        window_days: int,
        session: AsyncSession,
        cancel_event: Optional[asyncio.Event] = None,
        timeout_s: Optional[float] = None,
    ) -> List[HealthInsight]:
        """One insight per selected log date, ascending.

        Dates whose generation fails are skipped. Once `cancel_event` is set
        or `timeout_s` has elapsed no further dates are started.
        """
        all_dates = await self._health_repo.get_all_log_dates(user_id, session)
        if not all_dates:
            logger.info(f"No log dates found for user {user_id}")
            return []

        dates = select_history_dates(all_dates, window_days)
        deadline = time.monotonic() + timeout_s if timeout_s is not None else None

        results: List[HealthInsight] = []
        for day in dates:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"History for user {user_id} cancelled before {day}")
                break
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning(f"History for user {user_id} timed out before {day}")
                break
            try:
                insight = await self.get_or_generate_insight(
                    user_id, day, session, surface_errors=True
                )
            except Exception:
                logger.exception(f"Insight generation failed for user {user_id} on {day}, skipping")
                await session.rollback()
                continue
            results.append(insight)
            # a later failed day rolls the session back and would expire it
            session.expunge(insight)

        return results

    # ─────────────────────────────── helpers ────────────────────────────── #

    async def _store(self, insight: HealthInsight, session: AsyncSession) -> HealthInsight:
        try:
            return await self._insight_repo.save_insight(insight, session)
        except StoreWriteConflict as e:
            existing = await self._insight_repo.find_insight(e.user_id, e.day, session)
            if existing is None:
                raise
            logger.info(f"Concurrent insight for user {e.user_id} on {e.day} won, returning it")
            return existing


def select_history_dates(all_dates: List[date], window_days: int) -> List[date]:
    """Trailing `window_days` of the sorted log dates, always including the latest."""
    ordered = sorted(set(all_dates))
    if not ordered:
        return []
    selected = set(ordered[-window_days:]) if window_days > 0 else set()
    selected.add(ordered[-1])
    return sorted(selected)
