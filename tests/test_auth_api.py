"""
Tests for the /api/auth endpoints and session handling
"""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from vibely.main import create_app
from vibely.services.chat_service import ChatService

SIGNUP = {"email": "Maria@Example.com", "password": "secret123", "fullName": "Maria"}
ONBOARDING = {
    "fullName": "Maria Lopez",
    "bio": "Learning German",
    "nativeLanguage": "spanish",
    "learningLanguage": "german",
    "location": "Madrid",
}


@pytest.fixture(autouse=True)
def no_chat_calls():
    with patch.object(ChatService, "upsert_user", return_value=True) as mock_upsert:
        yield mock_upsert


class TestSignup:

    def test_signup_sets_cookie_and_hides_hash(self, client, settings):
        response = client.post("/api/auth/signup", json=SIGNUP)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "maria@example.com"
        assert body["user"]["isOnboarded"] is False
        assert body["user"]["profilePic"] == settings.DEFAULT_AVATAR_URL
        assert "passwordHash" not in body["user"]
        assert settings.SESSION_COOKIE_NAME in response.cookies

    def test_signup_syncs_chat_user(self, client, no_chat_calls):
        client.post("/api/auth/signup", json=SIGNUP)

        no_chat_calls.assert_called_once()

    @pytest.mark.parametrize("payload,message", [
        ({"email": "a@b.co", "password": "secret123"}, "All fields are required"),
        ({"email": "a@b.co", "password": "123", "fullName": "A"}, "at least 6"),
        ({"email": "not-an-email", "password": "secret123", "fullName": "A"}, "Invalid email"),
    ])
    def test_signup_validation(self, client, payload, message):
        response = client.post("/api/auth/signup", json=payload)

        assert response.status_code == 400
        assert message in response.json()["message"]

    def test_email_is_unique_ignoring_case(self, client):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post("/api/auth/signup", json={**SIGNUP, "email": "MARIA@example.COM"})

        assert response.status_code == 400


class TestLoginLogout:

    def test_login_and_me(self, client):
        client.post("/api/auth/signup", json=SIGNUP)
        client.cookies.clear()

        response = client.post("/api/auth/login", json={"email": "maria@example.com", "password": "secret123"})

        assert response.status_code == 200
        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["user"]["fullName"] == "Maria"

    def test_wrong_password(self, client):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post("/api/auth/login", json={"email": SIGNUP["email"], "password": "wrong-one"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "maria@example.com"})

        assert response.status_code == 400

    def test_logout_clears_session(self, client):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert client.get("/api/auth/me").status_code == 401


class TestOnboarding:

    def test_onboarding_completes_profile(self, client, no_chat_calls):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post("/api/auth/onboarding", json=ONBOARDING)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["isOnboarded"] is True
        assert user["nativeLanguage"] == "spanish"
        assert user["location"] == "Madrid"
        assert no_chat_calls.call_count == 2

    def test_onboarding_reports_missing_fields(self, client):
        client.post("/api/auth/signup", json=SIGNUP)

        response = client.post("/api/auth/onboarding", json={"fullName": "Maria", "bio": "hi"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "All fields are required"
        assert sorted(body["missingFields"]) == ["learningLanguage", "location", "nativeLanguage"]

    def test_onboarded_user_becomes_recommendable(self, client, make_user, auth_headers):
        other = make_user("Other")
        client.post("/api/auth/signup", json=SIGNUP)

        before = client.get("/api/users", headers=auth_headers(other)).json()["recommendedUser"]
        client.post("/api/auth/onboarding", json=ONBOARDING)
        after = client.get("/api/users", headers=auth_headers(other)).json()["recommendedUser"]

        assert [u["fullName"] for u in before] == []
        assert [u["fullName"] for u in after] == ["Maria Lopez"]


class TestServiceEndpoints:

    def test_root_and_health(self, client):
        assert client.get("/").json()["status"] == "running"

        health = client.get("/health").json()
        assert health["status"] == "healthy"
        assert health["services"]["chat"]["status"] == "not_configured"

    def test_chat_token_unavailable_without_credentials(self, client, make_user, auth_headers):
        user = make_user("Alice")

        response = client.get("/api/chat/token", headers=auth_headers(user))

        assert response.status_code == 500
        assert response.json()["message"] == "Chat service is not configured"


class TestRateLimiting:

    def test_login_limit_belongs_to_each_app(self, settings, database):
        limited_settings = settings.model_copy(update={"RATE_LIMIT_ENABLED": True, "AUTH_RATE_LIMIT": "2/minute"})
        limited = TestClient(create_app(limited_settings, database=database))
        unlimited = TestClient(create_app(settings, database=database))
        credentials = {"email": "nobody@example.com", "password": "whatever"}

        limited_codes = [limited.post("/api/auth/login", json=credentials).status_code for _ in range(3)]
        unlimited_codes = [unlimited.post("/api/auth/login", json=credentials).status_code for _ in range(3)]

        assert limited_codes == [401, 401, 429]
        assert unlimited_codes == [401, 401, 401]
        assert "message" in limited.post("/api/auth/login", json=credentials).json()
