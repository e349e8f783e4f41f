"""Health record entities (owned by the health record store, read-only here)."""
from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from pharmis_backend.infrastructure.db.meta import Base


class ActivityType(str, Enum):
    EXERCISE = "EXERCISE"
    SMOKING = "SMOKING"
    DRINKING = "DRINKING"


class DailyLog(Base):
    """One mood/notes entry per user per calendar day."""

    __tablename__ = "daily_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_logs_user_date"),
        CheckConstraint("mood BETWEEN 1 AND 5", name="ck_daily_logs_mood"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    date = Column(Date, nullable=False)
    mood = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    symptoms = relationship(
        "Symptom",
        back_populates="daily_log",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    medications = relationship(
        "MedicationLog",
        back_populates="daily_log",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class Symptom(Base):
    __tablename__ = "symptoms"
    __table_args__ = (
        CheckConstraint("severity BETWEEN 1 AND 3", name="ck_symptoms_severity"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    daily_log_id = Column(
        UUID(as_uuid=True), ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    severity = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="symptoms")


class MedicationLog(Base):
    __tablename__ = "medication_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    daily_log_id = Column(
        UUID(as_uuid=True), ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=True)
    taken = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="medications")


class LifestyleLog(Base):
    """Exercise / smoking / drinking event. Several per day are allowed."""

    __tablename__ = "lifestyle_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    activity_type = Column(String(20), nullable=False)  # ActivityType value
    activity_name = Column(String(100), nullable=False)
    duration = Column(Integer, nullable=True)  # minutes
    intensity = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
