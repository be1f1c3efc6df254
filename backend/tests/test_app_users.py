"""
Tests for study app accounts, preferences and statistics.

Tests cover:
- Sign up / sign in / sign out and the reset-request answer
- Version check against the configured versions
- Preferences created on first read, validated on update
- Counter increments, derived average score and the study streak
"""

from datetime import datetime, timezone

import pytest

from rest_api.models import AppUser
from rest_api.services.domain.app_user_service import RESET_MESSAGE

AUTH = "/api/auth"
PREFS = "/api/user/preferences"
STATS = "/api/user/stats"


@pytest.fixture
def user(client):
    response = client.post(
        f"{AUTH}/signup",
        json={"email": "neha@test.com", "password": "study123", "name": "Neha"},
    )
    assert response.status_code == 201
    return response.json()["user"]


class TestAuth:
    def test_signup_returns_user_without_password(self, user):
        assert user["id"].startswith("USER-")
        assert user["email"] == "neha@test.com"
        assert user["is_active"] is True
        assert "password" not in user

    def test_duplicate_signup_is_409(self, client, user):
        response = client.post(f"{AUTH}/signup", json={"email": "neha@test.com", "password": "x", "name": "N"})
        assert response.status_code == 409

    def test_signup_requires_name(self, client, db_session):
        response = client.post(f"{AUTH}/signup", json={"email": "a@test.com", "password": "x"})
        assert response.status_code == 400

    def test_signup_rejects_overlong_password(self, client, db_session):
        response = client.post(
            f"{AUTH}/signup", json={"email": "long@test.com", "password": "p" * 80, "name": "Long"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at most 72 bytes"

        response = client.post(f"{AUTH}/signin", json={"email": "long@test.com", "password": "p" * 80})
        assert response.status_code == 401

    def test_signin(self, client, user):
        response = client.post(
            f"{AUTH}/signin",
            json={"email": "neha@test.com", "password": "study123", "device_info": {"os": "android"}},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Sign in successful"
        assert response.json()["user"]["last_login_at"] is not None

        response = client.post(f"{AUTH}/signin", json={"email": "neha@test.com", "password": "wrong"})
        assert response.status_code == 401

    def test_deactivated_account_cannot_sign_in(self, client, db_session, user):
        db_session.get(AppUser, user["id"]).is_active = False
        db_session.commit()

        response = client.post(f"{AUTH}/signin", json={"email": "neha@test.com", "password": "study123"})

        assert response.status_code == 401
        assert "deactivated" in response.json()["detail"]

    def test_forgot_password_does_not_reveal_accounts(self, client, user):
        known = client.post(f"{AUTH}/forgot-password", json={"email": "neha@test.com"}).json()
        unknown = client.post(f"{AUTH}/forgot-password", json={"email": "ghost@test.com"}).json()

        assert known["message"] == unknown["message"] == RESET_MESSAGE

    def test_profile_and_push_token(self, client, user):
        response = client.put(f"{AUTH}/profile", json={"user_id": user["id"], "name": "Neha S"})
        assert response.json()["user"]["name"] == "Neha S"

        client.put(f"{AUTH}/fcm-token", json={"user_id": user["id"], "fcm_token": "tok-1"})
        assert client.get(f"{AUTH}/profile/{user['id']}").json()["user"]["fcm_token"] == "tok-1"

        client.post(f"{AUTH}/signout", json={"user_id": user["id"]})
        assert client.get(f"{AUTH}/profile/{user['id']}").json()["user"]["fcm_token"] is None

    def test_list_and_delete_users(self, client, user):
        listed = client.get(f"{AUTH}/users").json()
        assert listed["message"] == "1 users found"

        assert client.delete(f"{AUTH}/user/{user['id']}").json()["success"] is True
        assert client.get(f"{AUTH}/profile/{user['id']}").status_code == 404

    def test_version_check(self, client, monkeypatch):
        from shared.config.settings import settings

        monkeypatch.setattr(settings, "app_latest_version", "2.1.0")
        monkeypatch.setattr(settings, "app_min_version", "2.0")

        old = client.get(f"{AUTH}/version-check", params={"currentVersion": "1.9.9", "platform": "ios"}).json()["data"]
        assert old["is_force_update"] is True
        assert old["is_optional_update"] is True
        assert old["platform"] == "ios"

        current = client.get(f"{AUTH}/version-check", params={"currentVersion": "2.1"}).json()["data"]
        assert current["is_force_update"] is False
        assert current["is_optional_update"] is False


class TestPreferences:
    def test_template(self, client):
        data = client.get(f"{PREFS}/template/default").json()["data"]
        assert data["user_id"] == ""
        assert data["study_reminder_time"] == "19:00"

    def test_defaults_on_first_read(self, client, user):
        data = client.get(f"{PREFS}/{user['id']}").json()["data"]

        assert data["theme_mode"] == "system"
        assert data["reminder_frequency"] == "daily"
        assert data["auto_save_interval"] == 5

    def test_update_and_reset(self, client, user):
        response = client.put(
            f"{PREFS}/{user['id']}",
            json={"theme_mode": "dark", "favorite_subjects": ["History"], "unknown_key": 1},
        )
        assert response.status_code == 200
        assert response.json()["data"]["theme_mode"] == "dark"
        assert response.json()["data"]["favorite_subjects"] == ["History"]

        data = client.post(f"{PREFS}/{user['id']}/reset").json()["data"]
        assert data["theme_mode"] == "system"
        assert data["favorite_subjects"] == []

    def test_all_errors_reported(self, client, user):
        response = client.put(
            f"{PREFS}/{user['id']}",
            json={"theme_mode": "neon", "study_reminder_time": "25:00", "sound_enabled": "yes"},
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "Validation failed"
        assert len(detail["errors"]) == 3

    def test_unknown_user_is_404(self, client, db_session):
        response = client.get(f"{PREFS}/USER-missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"


class TestStats:
    def test_defaults(self, client, user):
        data = client.get(f"{STATS}/{user['id']}").json()["data"]
        assert data["total_quizzes"] == 0
        assert data["average_score"] == 0.0

    def test_increment_recomputes_average(self, client, user):
        client.post(f"{STATS}/{user['id']}/increment", json={"type": "total_questions", "value": 4, "subject": "Polity"})
        response = client.post(
            f"{STATS}/{user['id']}/increment", json={"type": "correct_answers", "value": 3, "subject": "Polity"}
        )

        data = response.json()["data"]
        assert data["average_score"] == 75.0
        assert data["subject_stats"] == {"Polity": 7}

    def test_quizzes_extend_the_streak(self, client, user):
        client.post(f"{STATS}/{user['id']}/increment", json={"type": "total_quizzes"})
        data = client.post(f"{STATS}/{user['id']}/increment", json={"type": "total_quizzes"}).json()["data"]

        assert data["total_quizzes"] == 2
        assert data["study_streak"] == 2

    def test_invalid_increment(self, client, user):
        assert client.post(f"{STATS}/{user['id']}/increment", json={"type": "average_score"}).status_code == 400
        assert client.post(f"{STATS}/{user['id']}/increment", json={}).status_code == 400

    def test_study_activity_rounds_up_to_hours(self, client, user):
        data = client.post(
            f"{STATS}/{user['id']}/activity", json={"activityType": "study", "duration": 90}
        ).json()["data"]
        assert data["total_study_hours"] == 2

        assert client.post(f"{STATS}/{user['id']}/activity", json={"activityType": "nap"}).status_code == 400

    def test_update_validates_and_derives_average(self, client, user):
        response = client.put(f"{STATS}/{user['id']}", json={"total_questions": 10, "correct_answers": 9})
        assert response.json()["data"]["average_score"] == 90.0

        response = client.put(f"{STATS}/{user['id']}", json={"total_quizzes": -1})
        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == ["total_quizzes must be a non-negative integer"]

    def test_reset(self, client, user):
        client.post(f"{STATS}/{user['id']}/increment", json={"type": "saved_notes", "value": 3})
        data = client.post(f"{STATS}/{user['id']}/reset").json()["data"]
        assert data["saved_notes"] == 0

    def test_range(self, client, user):
        client.post(f"{STATS}/{user['id']}/increment", json={"type": "total_quizzes"})
        today = datetime.now(timezone.utc).date().isoformat()

        data = client.get(f"{STATS}/{user['id']}/range", params={"startDate": today, "endDate": today}).json()["data"]
        assert data["total_quizzes"] == 1

        past = client.get(
            f"{STATS}/{user['id']}/range", params={"startDate": "2020-01-01", "endDate": "2020-01-31"}
        ).json()["data"]
        assert past["total_quizzes"] == 0

        assert client.get(f"{STATS}/{user['id']}/range", params={"startDate": "bad"}).status_code == 400

    def test_leaderboard_and_summary(self, client, user):
        other = client.post(
            f"{AUTH}/signup", json={"email": "arjun@test.com", "password": "pw", "name": "Arjun"}
        ).json()["user"]
        client.post(f"{STATS}/{user['id']}/increment", json={"type": "total_quizzes", "value": 5})
        client.post(f"{STATS}/{other['id']}/increment", json={"type": "total_quizzes", "value": 2})

        board = client.get(f"{STATS}/leaderboard/total_quizzes").json()["data"]
        assert [(e["rank"], e["user_name"], e["score"]) for e in board] == [(1, "Neha", 5), (2, "Arjun", 2)]

        summary = client.get(f"{STATS}/summary/all").json()["data"]
        assert summary["total_users"] == 2
        assert summary["total_quizzes_completed"] == 7

        assert client.get(f"{STATS}/leaderboard/charisma").status_code == 400
