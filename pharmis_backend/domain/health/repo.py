"""Read-only port onto the health record store."""
from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.health.entities import DailyLog, LifestyleLog


class HealthRecordRepository(ABC):
    """Queries the insight pipeline needs from the health record store."""

    @abstractmethod
    async def get_daily_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[DailyLog]:
        """Daily logs with start_date <= date <= end_date, ascending by date."""
        pass

    @abstractmethod
    async def get_lifestyle_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[LifestyleLog]:
        """Lifestyle logs with start_date <= date <= end_date, ascending by date."""
        pass

    @abstractmethod
    async def get_all_log_dates(self, user_id: UUID, session: AsyncSession) -> List[date]:
        """Sorted, deduplicated union of days carrying a daily or lifestyle log."""
        pass
