"""Errors raised by the insight pipeline and its ports."""
from __future__ import annotations

from datetime import date
from uuid import UUID


class InvalidDateFormat(ValueError):
    """Caller supplied something other than a YYYY-MM-DD calendar day."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Date must be in YYYY-MM-DD format, got {value!r}")


class CompletionServiceError(RuntimeError):
    """The completion call failed, timed out or returned no usable text."""


class StoreWriteConflict(RuntimeError):
    """Another writer already stored the insight for this (user, day)."""

    def __init__(self, user_id: UUID, day: date):
        self.user_id = user_id
        self.day = day
        super().__init__(f"Insight for user {user_id} on {day.isoformat()} already exists")
