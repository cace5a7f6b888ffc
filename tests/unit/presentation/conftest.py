"""Fixtures for HTTP router tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from intake_engine.application.services import RecommendationService
from intake_engine.infrastructure.database import get_db
from intake_engine.main import create_app
from intake_engine.presentation.http.dependencies import (
    get_intake_service,
    get_mastery_service,
    get_recommendation_service,
)


@pytest.fixture
def app(
    settings, mock_db_session, intake_service, mastery_service, mastery_repo, learner_repo
) -> FastAPI:
    """App wired to in-memory services; the lifespan never runs."""
    app = create_app(settings)

    async def override_db():
        yield mock_db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_intake_service] = lambda: intake_service
    app.dependency_overrides[get_mastery_service] = lambda: mastery_service
    app.dependency_overrides[get_recommendation_service] = lambda: RecommendationService(
        mastery_repo, learner_repo
    )
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def headers(user_id) -> dict[str, str]:
    return {"X-User-ID": str(user_id)}
