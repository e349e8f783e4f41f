"""Generated health insight entity."""
from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import Column, Date, DateTime, Index, String, Text, UniqueConstraint

from pharmis_backend.infrastructure.db.meta import Base

TITLE_MAX_LENGTH = 255
CONTENT_MAX_LENGTH = 10000


class InsightCategory(str, Enum):
    SLEEP = "Sleep"
    EXERCISE = "Exercise"
    HYDRATION = "Hydration"
    MOOD = "Mood"
    SYMPTOMS = "Symptoms"
    MEDICATION = "Medication"
    GENERAL = "General"


class HealthInsight(Base):
    """One generated insight per user per calendar day; never mutated."""

    __tablename__ = "health_insights"
    __table_args__ = (
        UniqueConstraint("user_id", "generated_date", name="uq_health_insights_user_day"),
        Index("ix_health_insights_user_category", "user_id", "category"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default=InsightCategory.GENERAL.value)
    generated_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
