"""Unit tests for app.core.security: bcrypt hashing and JWT access tokens."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from app.core.config import Settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    new_token_id,
    token_expiry,
    verify_password,
)


def _settings(**overrides: object) -> Settings:
    return Settings(DATABASE_URL="sqlite://", JWT_SECRET=SecretStr("test-secret"), **overrides)


class TestPasswords(unittest.TestCase):
    def test_hash_verifies(self) -> None:
        hashed = hash_password("password1")
        self.assertNotEqual(hashed, "password1")
        self.assertTrue(verify_password("password1", hashed))
        self.assertFalse(verify_password("password2", hashed))

    def test_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("password1", "not-a-bcrypt-hash"))


class TestAccessTokens(unittest.TestCase):
    def test_round_trip_claims(self) -> None:
        settings = _settings()
        jti = new_token_id()
        token = create_access_token(42, jti, token_expiry(settings), settings)
        claims = decode_access_token(token, settings)
        self.assertEqual(claims["sub"], "42")
        self.assertEqual(claims["jti"], jti)

    def test_token_ids_are_unique(self) -> None:
        self.assertNotEqual(new_token_id(), new_token_id())

    def test_expired_token_rejected(self) -> None:
        settings = _settings()
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = create_access_token(1, new_token_id(), past, settings)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, settings)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(1, new_token_id(), token_expiry(_settings()), _settings())
        other = Settings(DATABASE_URL="sqlite://", JWT_SECRET=SecretStr("other-secret"))
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, other)

    def test_expiry_follows_setting(self) -> None:
        settings = _settings(JWT_EXPIRE_MINUTES=30)
        delta = token_expiry(settings) - datetime.now(UTC)
        self.assertGreater(delta, timedelta(minutes=29))
        self.assertLessEqual(delta, timedelta(minutes=30))


if __name__ == "__main__":
    unittest.main()
