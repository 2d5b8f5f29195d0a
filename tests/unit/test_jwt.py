"""Tests for session token issuing and decoding."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.core.config import get_settings
from app.infrastructure.security.jwt import issue_session_token, session_uid


def test_token_resolves_to_its_uid() -> None:
    assert session_uid(issue_session_token("uid-1")) == "uid-1"


def test_token_expires_after_configured_lifetime() -> None:
    lifetime = timedelta(minutes=get_settings().access_token_expire_minutes)
    token = issue_session_token("uid-1", issued_at=datetime.now(UTC) - lifetime - timedelta(seconds=5))
    with pytest.raises(ValueError):
        session_uid(token)


def test_token_within_lifetime_is_accepted() -> None:
    token = issue_session_token("uid-1", issued_at=datetime.now(UTC) - timedelta(minutes=1))
    assert session_uid(token) == "uid-1"


def test_empty_uid_is_refused() -> None:
    with pytest.raises(ValueError):
        issue_session_token("")


def test_token_signed_with_other_key_is_rejected() -> None:
    token = jwt.encode({"sub": "uid-1", "exp": 9_999_999_999}, "other-key", algorithm="HS256")
    with pytest.raises(ValueError):
        session_uid(token)


def test_token_without_sub_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"exp": 9_999_999_999},
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    with pytest.raises(ValueError):
        session_uid(token)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        session_uid("not-a-jwt")
