"""PostgreSQL implementation of HealthRecordRepository."""
from __future__ import annotations
from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy import and_, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.health.entities import DailyLog, LifestyleLog
from pharmis_backend.domain.health.repo import HealthRecordRepository


class RDSHealthRecordRepository(HealthRecordRepository):
    """Async SQLAlchemy reads over daily_logs / lifestyle_logs."""

    async def get_daily_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[DailyLog]:
        stmt = (
            select(DailyLog)
            .where(
                and_(
                    DailyLog.user_id == user_id,
                    DailyLog.date >= start_date,
                    DailyLog.date <= end_date
                )
            )
            .order_by(DailyLog.date.asc())
            # rows may have been expired by a rollback earlier in this session
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_lifestyle_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[LifestyleLog]:
        stmt = (
            select(LifestyleLog)
            .where(
                and_(
                    LifestyleLog.user_id == user_id,
                    LifestyleLog.date >= start_date,
                    LifestyleLog.date <= end_date
                )
            )
            .order_by(LifestyleLog.date.asc(), LifestyleLog.created_at.asc())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_all_log_dates(self, user_id: UUID, session: AsyncSession) -> List[date]:
        # UNION (not UNION ALL) already deduplicates across both tables
        stmt = union(
            select(DailyLog.date).where(DailyLog.user_id == user_id),
            select(LifestyleLog.date).where(LifestyleLog.user_id == user_id),
        )
        result = await session.execute(stmt)
        return sorted({row[0] for row in result.all()})
