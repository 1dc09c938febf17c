"""Tests for password hashing and JWT helpers."""

from datetime import timedelta

from components.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)


class TestPasswords:
    def test_hash_is_salted(self):
        first = get_password_hash("secret123")
        second = get_password_hash("secret123")
        assert first != second
        assert first.count(":") == 1

    def test_verify(self):
        hashed = get_password_hash("secret123")
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:
    def test_round_trip_subject(self):
        token = create_access_token({"sub": "7"}, expires_delta=timedelta(minutes=5))
        assert verify_token(token)["sub"] == "7"

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "7"}, expires_delta=timedelta(minutes=-1))
        assert verify_token(token) is None

    def test_garbage_is_rejected(self):
        assert verify_token("not-a-token") is None
