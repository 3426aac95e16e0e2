"""
Tests for ChatService token minting and user sync
"""
from unittest.mock import MagicMock

import pytest
from jose import jwt

from vibely.core.config import Settings
from vibely.core.exceptions import ChatProviderError
from vibely.services.chat_service import ChatService


@pytest.fixture
def chat_settings():
    return Settings(
        _env_file=None,
        STREAM_API_KEY="key123",
        STREAM_API_SECRET="stream-secret",
    )


@pytest.fixture
def stream_client():
    return MagicMock()


def test_token_carries_user_id(chat_settings):
    service = ChatService(chat_settings)

    token = service.create_token("user-1")

    claims = jwt.decode(token, "stream-secret", algorithms=["HS256"])
    assert claims["user_id"] == "user-1"


def test_token_requires_credentials():
    service = ChatService(Settings(_env_file=None, STREAM_API_KEY="", STREAM_API_SECRET=""))

    with pytest.raises(ChatProviderError):
        service.create_token("user-1")


def test_upsert_sends_profile_to_provider(chat_settings, stream_client, make_user):
    user = make_user("Alice", profile_pic="https://img.example/alice.png")
    service = ChatService(chat_settings, client=stream_client)

    assert service.upsert_user(user) is True
    stream_client.upsert_user.assert_called_once_with({
        "id": str(user.id),
        "name": "Alice",
        "image": user.profile_pic,
    })


def test_upsert_failure_is_reported_not_raised(chat_settings, stream_client, make_user):
    user = make_user("Alice")
    stream_client.upsert_user.side_effect = ConnectionError("connection refused")
    service = ChatService(chat_settings, client=stream_client)

    assert service.upsert_user(user) is False


def test_upsert_skipped_when_not_configured(stream_client, make_user):
    user = make_user("Alice")
    service = ChatService(Settings(_env_file=None, STREAM_API_KEY="", STREAM_API_SECRET=""), client=stream_client)

    assert service.upsert_user(user) is False
    stream_client.upsert_user.assert_not_called()
