"""Unit tests for session token helpers."""

from datetime import timedelta

import pytest

from idlink.config import AuthSettings
from idlink.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


def test_round_trip(auth_settings):
    token = create_token("acct-1", auth_settings, provider="nostr")

    payload = verify_token(token, auth_settings)

    assert payload.account_id == "acct-1"
    assert payload.provider == "nostr"


def test_expired(auth_settings):
    token = create_token("acct-1", auth_settings, expires_in=timedelta(seconds=-1))

    with pytest.raises(JWTError):
        verify_token(token, auth_settings)


def test_wrong_secret(auth_settings):
    token = create_token("acct-1", auth_settings)

    with pytest.raises(JWTError):
        verify_token(token, AuthSettings(jwt_secret="other"))
