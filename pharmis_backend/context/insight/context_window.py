"""Insight context window data structure."""

import json
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List

WINDOW_DAYS = 7


def window_bounds(target_date: date, days: int = WINDOW_DAYS) -> tuple[date, date]:
    """Trailing window ending on `target_date`, inclusive on both ends."""
    return target_date - timedelta(days=days - 1), target_date


@dataclass
class InsightContextWindow:
    """Health data visible to the model when generating one day's insight."""

    user_id: str
    target_date: date
    window_start: date
    daily_logs: List[Dict[str, Any]] = field(default_factory=list)
    lifestyle_logs: List[Dict[str, Any]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.daily_logs and not self.lifestyle_logs

    def to_json(self) -> str:
        """Serialized InsightContext sent as the user message."""
        return json.dumps(
            {"daily_logs": self.daily_logs, "lifestyle_logs": self.lifestyle_logs},
            ensure_ascii=False,
        )

    def to_llm_messages(self, system_prompt: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": self.to_json()},
        ]

    def estimate_tokens(self) -> int:
        """Rough estimate of token count for logging."""
        return len(self.to_json()) // 4
