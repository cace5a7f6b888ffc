"""Tests for intake endpoints."""

from uuid import uuid4

from intake_engine.domain.entities import AssessmentSession, SessionStatus


class TestStartAndStatus:
    """Test session start and intake status."""

    def test_start(self, client, headers):
        response = client.post("/intake/start", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["is_resuming"] is False
        assert body["total_steps"] == 30
        assert body["first_step"]["id"] == "level_self_prediction"
        assert body["first_step"]["kind"] == "QUESTIONNAIRE"

    def test_start_twice_resumes(self, client, headers):
        first = client.post("/intake/start", headers=headers).json()
        second = client.post("/intake/start", headers=headers).json()

        assert second["session_id"] == first["session_id"]
        assert second["is_resuming"] is True

    def test_missing_user_header(self, client):
        assert client.post("/intake/start").status_code == 422

    def test_malformed_user_header(self, client):
        assert client.post("/intake/start", headers={"X-User-ID": "nope"}).status_code == 422

    def test_status_before_start(self, client, headers):
        body = client.get("/intake/status", headers=headers).json()

        assert body == {"has_completed": False, "latest_session": None}

    def test_status_after_start(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        body = client.get("/intake/status", headers=headers).json()

        assert body["has_completed"] is False
        assert body["latest_session"]["id"] == session_id
        assert body["latest_session"]["status"] == "IN_PROGRESS"


class TestSubmit:
    """Test answer submission."""

    def test_submit_grades_and_advances(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        response = client.post(
            f"/intake/sessions/{session_id}/submit",
            json={"step_id": "mcq_async", "answer": {"selected_option_id": "c"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["grade_result"]["passed"] is True
        assert body["next_step"]["id"] == "mcq_css_layout"
        assert body["is_complete"] is False
        assert body["progress"] == 33
        assert body["skill_updates"][0]["skill_key"] == "js_async"

    def test_completion_commits_and_schedules_extraction(
        self, client, headers, mock_db_session, scheduler
    ):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        body = client.post(
            f"/intake/sessions/{session_id}/submit",
            json={"step_id": "meta_ai_reasoning", "answer": {"text": ""}},
        ).json()

        assert body["is_complete"] is True
        assert body["next_step"] is None
        mock_db_session.commit.assert_awaited()
        assert len(scheduler.calls) == 1

    def test_unknown_session(self, client):
        response = client.post(
            f"/intake/sessions/{uuid4()}/submit",
            json={"step_id": "mcq_async", "answer": {}},
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"

    def test_unknown_step(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        response = client.post(
            f"/intake/sessions/{session_id}/submit",
            json={"step_id": "no_such_step", "answer": {}},
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "STEP_NOT_FOUND"

    def test_completed_session_conflict(self, client, session_repo, user_id):
        session = AssessmentSession(
            id=uuid4(), user_id=user_id, status=SessionStatus.COMPLETED, current_step="summary"
        )
        session_repo.sessions[session.id] = session

        response = client.post(
            f"/intake/sessions/{session.id}/submit",
            json={"step_id": "mcq_async", "answer": {"selected_option_id": "c"}},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SESSION_ALREADY_COMPLETED"

    def test_empty_step_id_rejected(self, client):
        response = client.post(
            f"/intake/sessions/{uuid4()}/submit", json={"step_id": "", "answer": None}
        )

        assert response.status_code == 422


class TestNavigation:
    """Test current/previous step and abandonment."""

    def test_current_step(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        body = client.get(f"/intake/sessions/{session_id}/current").json()

        assert body["step"]["id"] == "level_self_prediction"
        assert body["can_go_back"] is False
        assert body["previous_answer"] is None

    def test_previous_returns_prior_answer(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]
        client.post(
            f"/intake/sessions/{session_id}/submit",
            json={"step_id": "level_self_prediction", "answer": {"predicted_level": "beginner"}},
        )

        body = client.post(f"/intake/sessions/{session_id}/previous").json()

        assert body["step"]["id"] == "level_self_prediction"
        assert body["previous_answer"] == {"predicted_level": "beginner"}

    def test_previous_at_first_step_is_null(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        response = client.post(f"/intake/sessions/{session_id}/previous")

        assert response.status_code == 200
        assert response.json() is None

    def test_abandon(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]

        body = client.post(f"/intake/sessions/{session_id}/abandon").json()

        assert body["id"] == session_id
        assert body["status"] == "ABANDONED"

    def test_summary(self, client, headers):
        session_id = client.post("/intake/start", headers=headers).json()["session_id"]
        client.post(
            f"/intake/sessions/{session_id}/submit",
            json={"step_id": "mcq_async", "answer": {"selected_option_id": "c"}},
        )

        body = client.get(f"/intake/sessions/{session_id}/summary").json()

        assert body["session_id"] == session_id
        assert [r["step_id"] for r in body["step_results"]] == ["mcq_async"]
        assert body["profile_summary"]["total_skills_assessed"] == 1
