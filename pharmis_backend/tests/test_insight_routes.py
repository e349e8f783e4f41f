"""HTTP tests for the /insights router using dependency overrides."""

from datetime import date, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from pharmis_backend.config import settings
from pharmis_backend.dependencies import get_current_user_id, get_insight_service, get_session
from pharmis_backend.domain.insight.entities import HealthInsight, InsightCategory
from pharmis_backend.main import app
from pharmis_backend.services.insight.service import InsightService

from conftest import MockLLMService, make_daily_log, make_mock_session

USER_ID = uuid4()


def _stored(day, title="Hydration Gap", category=InsightCategory.HYDRATION):
    return HealthInsight(
        id=uuid4(),
        user_id=USER_ID,
        title=title,
        content="You logged 2 glasses of water on 4 of the last 7 days.",
        category=category.value,
        generated_date=day,
        created_at=datetime(2024, 1, 5, 8, 0),
    )


@pytest.fixture
def repos():
    insight_repo = AsyncMock()
    insight_repo.find_insight.return_value = None
    insight_repo.save_insight.side_effect = lambda insight, session: insight
    health_repo = AsyncMock()
    health_repo.get_daily_logs.return_value = []
    health_repo.get_lifestyle_logs.return_value = []
    health_repo.get_all_log_dates.return_value = []
    return {"insight_repo": insight_repo, "health_repo": health_repo}


@pytest.fixture
def llm():
    return MockLLMService()


@pytest.fixture
def client(repos, llm):
    service = InsightService(repos["insight_repo"], repos["health_repo"], llm)

    async def _session():
        yield make_mock_session()

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_insight_service] = lambda: service
    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestInsightForDate:

    def test_stored_insight_is_returned(self, client, repos, llm):
        repos["insight_repo"].find_insight.return_value = _stored(date(2024, 1, 5))

        response = client.get("/insights/2024-01-05")

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Hydration Gap"
        assert body["category"] == "Hydration"
        assert body["generated_date"] == "2024-01-05"
        assert body["user_id"] == str(USER_ID)
        llm.generate_response.assert_not_called()

    def test_malformed_date_is_bad_request(self, client, repos):
        response = client.get("/insights/01-05-2024")

        assert response.status_code == 400
        assert "YYYY-MM-DD" in response.json()["detail"]
        repos["insight_repo"].find_insight.assert_not_called()

    def test_day_without_logs_gets_no_data_record(self, client):
        response = client.get("/insights/2024-01-05")

        assert response.status_code == 200
        assert response.json()["title"] == "No Health Data"
        assert response.json()["category"] == "General"

    def test_generate_uses_model_output(self, client, repos, llm):
        repos["health_repo"].get_daily_logs.return_value = [make_daily_log(USER_ID, date(2024, 1, 5), mood=2)]
        llm.generate_response.return_value = (
            "Low Mood Streak: Your mood was 2/5 on 3 consecutive days. "
            "Try these specific steps: 1) walk 15 minutes daily, 2) call a friend twice, 3) log mood nightly."
        )

        response = client.post("/insights/generate", json={"date": "2024-01-05"})

        assert response.status_code == 200
        assert response.json()["title"] == "Low Mood Streak"
        assert response.json()["category"] == "Mood"

    def test_generate_rejects_malformed_date(self, client):
        response = client.post("/insights/generate", json={"date": "2024/01/05"})
        assert response.status_code == 400

    def test_storage_failure_is_server_error(self, client, repos):
        repos["insight_repo"].find_insight.side_effect = RuntimeError("database is down")

        response = client.get("/insights/2024-01-05")

        assert response.status_code == 500


class TestHistoryAndLatest:

    def test_history_lists_selected_days(self, client, repos):
        repos["health_repo"].get_all_log_dates.return_value = [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)]
        repos["insight_repo"].find_insight.side_effect = lambda uid, day, session: _stored(day)

        response = client.get("/insights/history", params={"days": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["days"] == 2
        assert body["total_count"] == 2
        assert [i["generated_date"] for i in body["insights"]] == ["2024-01-03", "2024-01-05"]

    def test_history_window_is_capped(self, client):
        response = client.get("/insights/history", params={"days": 10000})

        assert response.status_code == 200
        assert response.json()["days"] == settings().insight_history_max_days

    def test_history_rejects_non_positive_days(self, client):
        assert client.get("/insights/history", params={"days": 0}).status_code == 422

    def test_latest_is_null_when_nothing_stored(self, client, llm):
        response = client.get("/insights/latest")

        assert response.status_code == 200
        assert response.json() is None
        llm.generate_response.assert_not_called()


class TestListInsights:

    def test_lists_stored_insights_without_generating(self, client, repos, llm):
        repos["insight_repo"].list_insights.return_value = [
            _stored(date(2024, 1, 5)),
            _stored(date(2024, 1, 2)),
        ]

        response = client.get("/insights")

        assert response.status_code == 200
        body = response.json()
        assert body["days"] == settings().insight_list_default_days
        assert body["total_count"] == 2
        assert body["category"] is None
        assert [i["generated_date"] for i in body["insights"]] == ["2024-01-05", "2024-01-02"]
        llm.generate_response.assert_not_called()
        repos["insight_repo"].save_insight.assert_not_called()

    def test_category_and_days_are_forwarded(self, client, repos):
        repos["insight_repo"].list_insights.return_value = []

        response = client.get("/insights", params={"category": "Sleep", "days": 14})

        assert response.status_code == 200
        assert response.json()["category"] == "Sleep"
        call = repos["insight_repo"].list_insights.call_args
        assert call.args[0] == USER_ID
        assert (date.today() - call.args[1]).days == 14
        assert call.kwargs["category"] == InsightCategory.SLEEP

    def test_unknown_category_is_rejected(self, client):
        assert client.get("/insights", params={"category": "Astrology"}).status_code == 422

    def test_window_is_capped(self, client, repos):
        repos["insight_repo"].list_insights.return_value = []

        response = client.get("/insights", params={"days": 100000})

        assert response.json()["days"] == settings().insight_list_max_days


class TestAuth:

    @pytest.fixture
    def auth_client(self, repos, llm):
        service = InsightService(repos["insight_repo"], repos["health_repo"], llm)

        async def _session():
            yield make_mock_session()

        app.dependency_overrides[get_session] = _session
        app.dependency_overrides[get_insight_service] = lambda: service
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_invalid_token_is_unauthorized(self, auth_client):
        response = auth_client.get("/insights/latest", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_uid_claim_identifies_user(self, auth_client, repos):
        token = jwt.encode({"uid": str(USER_ID)}, settings().jwt_secret, algorithm=settings().jwt_algorithm)

        response = auth_client.get("/insights/latest", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert repos["insight_repo"].find_insight.call_args.args[0] == USER_ID


def test_health():
    assert TestClient(app).get("/health").json() == {"status": "ok"}
