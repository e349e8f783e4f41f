"""Repository interface for generated insights."""
from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.insight.entities import HealthInsight, InsightCategory


class InsightRepository(ABC):
    """Append-only store keyed by (user_id, generated_date)."""

    @abstractmethod
    async def find_insight(
        self,
        user_id: UUID,
        day: date,
        session: AsyncSession
    ) -> Optional[HealthInsight]:
        """Return the insight generated for `day`, if any."""
        pass

    @abstractmethod
    async def list_insights(
        self,
        user_id: UUID,
        since: date,
        session: AsyncSession,
        category: Optional[InsightCategory] = None
    ) -> List[HealthInsight]:
        """Insights generated on or after `since`, newest first, optionally one category."""
        pass

    @abstractmethod
    async def save_insight(
        self,
        insight: HealthInsight,
        session: AsyncSession
    ) -> HealthInsight:
        """Append a new insight.

        Raises StoreWriteConflict when a record for the same (user, day)
        already exists.
        """
        pass
