"""Context providers turning health records into prompt-ready dicts."""

from datetime import date
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pharmis_backend.domain.health.entities import DailyLog, LifestyleLog
from pharmis_backend.domain.health.repo import HealthRecordRepository


def _daily_log_to_dict(log: DailyLog) -> Dict[str, Any]:
    return {
        "date": log.date.isoformat(),
        "mood": log.mood,
        "notes": log.notes,
        "symptoms": [
            {"name": s.name, "severity": s.severity, "notes": s.notes}
            for s in (log.symptoms or [])
        ],
        "medications_taken": [
            {"name": m.name, "dosage": m.dosage, "taken": bool(m.taken)}
            for m in (log.medications or [])
        ],
    }


def _lifestyle_log_to_dict(log: LifestyleLog) -> Dict[str, Any]:
    data = {
        "date": log.date.isoformat(),
        "activity_type": log.activity_type,
        "activity_name": log.activity_name,
    }
    # optional measurements are only sent when logged
    for key in ("duration", "intensity", "quantity", "notes"):
        value = getattr(log, key)
        if value is not None:
            data[key] = value
    return data


class DailyLogProvider:
    """Provides mood, symptom and medication entries for a window."""

    def __init__(self, health_repo: HealthRecordRepository):
        self._repo = health_repo

    async def get_daily_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[Dict[str, Any]]:
        logs = await self._repo.get_daily_logs(user_id, start_date, end_date, session)
        return [_daily_log_to_dict(log) for log in logs]


class LifestyleLogProvider:
    """Provides exercise / smoking / drinking events for a window."""

    def __init__(self, health_repo: HealthRecordRepository):
        self._repo = health_repo

    async def get_lifestyle_logs(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        session: AsyncSession
    ) -> List[Dict[str, Any]]:
        logs = await self._repo.get_lifestyle_logs(user_id, start_date, end_date, session)
        return [_lifestyle_log_to_dict(log) for log in logs]
