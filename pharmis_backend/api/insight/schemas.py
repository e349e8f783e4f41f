"""Pydantic schemas for insight API."""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class InsightRead(BaseModel):
    """Schema for reading a stored insight."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[UUID] = None
    user_id: UUID
    title: str
    content: str
    category: str
    generated_date: date
    created_at: Optional[datetime] = None


class InsightGenerateRequest(BaseModel):
    """Schema for requesting the insight of one day."""
    date: str = Field(..., description="Calendar day in YYYY-MM-DD format", examples=["2024-01-05"])


class InsightHistory(BaseModel):
    """Schema for the insight history listing."""
    insights: List[InsightRead]
    total_count: int
    days: int


class InsightList(BaseModel):
    """Schema for listing stored insights."""
    insights: List[InsightRead]
    total_count: int
    days: int
    category: Optional[str] = None
