"""PostgreSQL implementation of InsightRepository."""
from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.insight.entities import HealthInsight, InsightCategory
from pharmis_backend.domain.insight.errors import StoreWriteConflict
from pharmis_backend.domain.insight.repo import InsightRepository

logger = logging.getLogger(__name__)


class RDSInsightRepository(InsightRepository):
    """Relies on uq_health_insights_user_day to reject a second insert."""

    async def find_insight(
        self,
        user_id: UUID,
        day: date,
        session: AsyncSession
    ) -> Optional[HealthInsight]:
        stmt = (
            select(HealthInsight)
            .where(
                and_(
                    HealthInsight.user_id == user_id,
                    HealthInsight.generated_date == day
                )
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_insights(
        self,
        user_id: UUID,
        since: date,
        session: AsyncSession,
        category: Optional[InsightCategory] = None
    ) -> List[HealthInsight]:
        conditions = [
            HealthInsight.user_id == user_id,
            HealthInsight.generated_date >= since,
        ]
        if category is not None:
            conditions.append(HealthInsight.category == category.value)

        stmt = (
            select(HealthInsight)
            .where(and_(*conditions))
            .order_by(HealthInsight.generated_date.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def save_insight(
        self,
        insight: HealthInsight,
        session: AsyncSession
    ) -> HealthInsight:
        try:
            session.add(insight)
            await session.commit()
            await session.refresh(insight)
            return insight
        except IntegrityError as e:
            await session.rollback()
            logger.warning(
                f"Insight insert conflict for user {insight.user_id} on {insight.generated_date}"
            )
            raise StoreWriteConflict(insight.user_id, insight.generated_date) from e
