"""Tests for password hashing and bearer tokens."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from todo_api.core.config import Settings
from todo_api.core.security import hash_password, issue_token, verify_password, verify_token
from todo_api.errors import InvalidTokenError


@pytest.fixture
def token_settings():
    return Settings(jwt_secret="unit-test-secret", jwt_expire="7d")


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("hunter22", rounds=4)
    second = hash_password("hunter22", rounds=4)

    assert "hunter22" not in first
    assert first != second
    assert verify_password("hunter22", first)
    assert verify_password("hunter22", second)


def test_verify_password_rejects_wrong_password():
    hashed = hash_password("hunter22", rounds=4)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("", hashed)


def test_verify_password_handles_corrupt_hash():
    assert not verify_password("hunter22", "not-a-bcrypt-hash")


def test_token_round_trip(token_settings):
    token = issue_token(42, "alice@example.com", token_settings)
    claims = verify_token(token, token_settings)

    assert claims.user_id == 42
    assert claims.email == "alice@example.com"


def test_token_expires_after_lifetime(token_settings):
    long_ago = datetime.now(timezone.utc) - timedelta(days=8)
    token = issue_token(42, "alice@example.com", token_settings, now=long_ago)

    with pytest.raises(InvalidTokenError):
        verify_token(token, token_settings)


def test_token_lifetime_is_configurable():
    settings = Settings(jwt_secret="unit-test-secret", jwt_expire="1h")
    two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
    token = issue_token(1, "a@example.com", settings, now=two_hours_ago)

    with pytest.raises(InvalidTokenError):
        verify_token(token, settings)


def test_token_signed_with_other_secret_is_rejected(token_settings):
    forged = issue_token(42, "alice@example.com", Settings(jwt_secret="attacker"))
    with pytest.raises(InvalidTokenError):
        verify_token(forged, token_settings)


def test_tampered_payload_is_rejected(token_settings):
    header, payload, signature = issue_token(42, "alice@example.com", token_settings).split(".")
    other = issue_token(1, "bob@example.com", token_settings).split(".")[1]

    with pytest.raises(InvalidTokenError):
        verify_token(".".join([header, other, signature]), token_settings)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(token_settings, token):
    with pytest.raises(InvalidTokenError):
        verify_token(token, token_settings)


def test_unsigned_token_is_rejected(token_settings):
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "42", "exp": exp}, None, algorithm="none")

    with pytest.raises(InvalidTokenError):
        verify_token(token, token_settings)


def test_token_without_expiry_is_rejected(token_settings):
    token = jwt.encode({"sub": "42"}, token_settings.jwt_secret, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_token(token, token_settings)


def test_token_with_non_numeric_subject_is_rejected(token_settings):
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "alice", "exp": exp}, token_settings.jwt_secret, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        verify_token(token, token_settings)
