"""Tests for health endpoints."""

from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError


class TestHealth:
    """Test liveness, health and readiness probes."""

    def test_live(self, client):
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_health_reports_collaborators(self, client, settings):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["version"] == settings.version
        assert body["checks"] == {"rubric_grader": True, "code_runner": True}

    def test_ready(self, client, mock_db_session):
        body = client.get("/ready").json()

        assert body == {"ready": True, "checks": {"database": True}}
        mock_db_session.execute.assert_awaited_once()

    def test_not_ready_when_database_fails(self, client, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("refused"))
        )

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"ready": False, "checks": {"database": False}}
