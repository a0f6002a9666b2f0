"""Tests for bearer token issue and verification."""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.security import create_access_token, verify_token


def test_token_round_trip_keeps_subject_and_claims() -> None:
    token = create_access_token("member-1", extra_claims={"email": "a@example.com"})
    user = verify_token(token)
    assert user.uid == "member-1"
    assert user.claims["email"] == "a@example.com"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("member-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthenticationException, match="expired"):
        verify_token(token)


def test_wrong_signature_is_rejected() -> None:
    settings = get_settings()
    token = jwt.encode({"sub": "member-1", "exp": 9999999999}, "other-key", algorithm=settings.algorithm)
    with pytest.raises(AuthenticationException, match="Invalid token"):
        verify_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(AuthenticationException):
        verify_token("not-a-jwt")
