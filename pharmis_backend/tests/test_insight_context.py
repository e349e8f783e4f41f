"""Tests for the insight context window and builder."""

import json
import pytest
import pytest_asyncio
from datetime import date
from uuid import uuid4
from unittest.mock import AsyncMock

from pharmis_backend.context.insight import (
    InsightContextBuilder,
    InsightContextWindow,
    InsightPrompts,
    NO_INSIGHT_PHRASE,
    window_bounds,
)
from pharmis_backend.domain.insight.errors import InvalidDateFormat
from pharmis_backend.services.insight.dates import parse_calendar_date

from conftest import make_daily_log, make_lifestyle_log


@pytest_asyncio.fixture
async def health_repo():
    repo = AsyncMock()
    repo.get_daily_logs.return_value = []
    repo.get_lifestyle_logs.return_value = []
    return repo


@pytest_asyncio.fixture
async def builder(health_repo):
    return InsightContextBuilder(health_repo)


class TestWindowBounds:

    def test_window_is_seven_days_inclusive(self):
        assert window_bounds(date(2024, 1, 7)) == (date(2024, 1, 1), date(2024, 1, 7))

    def test_window_crosses_month_boundary(self):
        assert window_bounds(date(2024, 3, 3)) == (date(2024, 2, 26), date(2024, 3, 3))


class TestParseCalendarDate:

    def test_parses_exact_pattern(self):
        assert parse_calendar_date("2024-01-05") == date(2024, 1, 5)

    def test_passes_dates_through(self):
        assert parse_calendar_date(date(2024, 1, 5)) == date(2024, 1, 5)

    @pytest.mark.parametrize("value", [
        "01-01-2024",
        "2024-1-5",
        "2024-01-05T00:00:00",
        "2024-02-30",
        "",
        None,
        20240105,
    ])
    def test_rejects_other_shapes(self, value):
        with pytest.raises(InvalidDateFormat):
            parse_calendar_date(value)


class TestInsightContextBuilder:

    @pytest.mark.asyncio
    async def test_queries_trailing_window(self, builder, health_repo, mock_session):
        user_id = uuid4()

        window = await builder.build_for_date(user_id, date(2024, 1, 10), mock_session)

        health_repo.get_daily_logs.assert_called_once_with(
            user_id, date(2024, 1, 4), date(2024, 1, 10), mock_session
        )
        health_repo.get_lifestyle_logs.assert_called_once_with(
            user_id, date(2024, 1, 4), date(2024, 1, 10), mock_session
        )
        assert window.window_start == date(2024, 1, 4)
        assert window.target_date == date(2024, 1, 10)
        assert window.is_empty()

    @pytest.mark.asyncio
    async def test_serialises_logs(self, builder, health_repo, mock_session):
        user_id = uuid4()
        health_repo.get_daily_logs.return_value = [
            make_daily_log(
                user_id, date(2024, 1, 9), mood=2, notes="Low energy",
                symptoms=[("Headache", 2)], medications=[("Lisinopril", "10mg")],
            )
        ]
        health_repo.get_lifestyle_logs.return_value = [
            make_lifestyle_log(user_id, date(2024, 1, 8), duration=30, intensity="Moderate")
        ]

        window = await builder.build_for_date(user_id, date(2024, 1, 10), mock_session)

        assert not window.is_empty()
        assert window.daily_logs == [{
            "date": "2024-01-09",
            "mood": 2,
            "notes": "Low energy",
            "symptoms": [{"name": "Headache", "severity": 2, "notes": None}],
            "medications_taken": [{"name": "Lisinopril", "dosage": "10mg", "taken": True}],
        }]
        assert window.lifestyle_logs == [{
            "date": "2024-01-08",
            "activity_type": "EXERCISE",
            "activity_name": "Walking",
            "duration": 30,
            "intensity": "Moderate",
        }]

    def test_messages_pair_system_prompt_with_json_context(self, builder):
        window = InsightContextWindow(
            user_id="u1",
            target_date=date(2024, 1, 10),
            window_start=date(2024, 1, 4),
            daily_logs=[{"date": "2024-01-10", "mood": 4}],
        )

        messages = builder.prepare_llm_messages(window)

        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == InsightPrompts.DAILY_INSIGHT_SYSTEM
        assert json.loads(messages[1]["content"]) == {
            "daily_logs": [{"date": "2024-01-10", "mood": 4}],
            "lifestyle_logs": [],
        }


class TestInsightPrompts:

    def test_system_prompt_states_the_grammar(self):
        prompt = InsightPrompts.DAILY_INSIGHT_SYSTEM
        assert "Title: <Specific Pattern or Issue>:" in prompt
        assert "exactly 3 numbered steps" in prompt
        assert NO_INSIGHT_PHRASE in prompt
