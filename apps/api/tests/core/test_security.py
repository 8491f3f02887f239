"""
Unit tests for password hashing and the token issuer.
"""

from datetime import timedelta

import jwt
import pytest

from school_admin.core.config import settings
from school_admin.core.security import (
    TokenExpiredError,
    TokenInvalidError,
    decode_long_token,
    decode_short_token,
    encode_token,
    hash_password,
    issue_long_lived_token,
    issue_short_lived_token,
    verify_password,
)


class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$2")

    def test_verify_password_round_trip(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", hashed) is True
        assert verify_password("wrong-pass", hashed) is False

    def test_same_password_gets_fresh_salt(self):
        assert hash_password("same") != hash_password("same")

    def test_verify_against_garbage_hash_is_false(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestTokenIssuer:
    """Tests for long- and short-lived token issuance."""

    def test_long_token_claims(self):
        token = issue_long_lived_token("a1b2c3d4e5", "root", "superadmin")
        payload = decode_long_token(token)

        assert payload["sub"] == "a1b2c3d4e5"
        assert payload["key"] == "root"
        assert payload["role"] == "superadmin"
        assert payload["type"] == "long"
        assert payload["exp"] - payload["iat"] == settings.long_token_expire_days * 86400

    def test_short_token_derived_from_long_token(self):
        long_token = issue_long_lived_token("a1b2c3d4e5", "root", "admin")
        short_token = issue_short_lived_token(long_token, "Mozilla/5.0")
        payload = decode_short_token(short_token)

        assert payload["sub"] == "a1b2c3d4e5"
        assert payload["key"] == "root"
        assert payload["role"] == "admin"
        assert payload["ltk"] == long_token
        assert payload["device"] == "Mozilla/5.0"
        assert payload["type"] == "short"
        assert payload["exp"] - payload["iat"] == settings.short_token_expire_minutes * 60

    def test_short_token_signed_with_short_secret(self):
        long_token = issue_long_lived_token("a1b2c3d4e5", "root", "admin")
        short_token = issue_short_lived_token(long_token, "device")

        with pytest.raises(TokenInvalidError):
            decode_long_token(short_token)

    def test_long_token_is_not_accepted_as_short_token(self):
        long_token = issue_long_lived_token("a1b2c3d4e5", "root", "admin")

        with pytest.raises(TokenInvalidError):
            decode_short_token(long_token)

    def test_short_token_from_malformed_long_token(self):
        with pytest.raises(TokenInvalidError):
            issue_short_lived_token("not-a-jwt", "device")


class TestTokenVerification:
    """Tests for expiry and signature classification."""

    def test_expired_token(self):
        token = encode_token(
            {"sub": "a1b2c3d4e5", "type": "short"},
            settings.short_token_secret,
            timedelta(minutes=-1),
        )
        with pytest.raises(TokenExpiredError):
            decode_short_token(token)

    def test_expired_token_with_bad_signature_reports_expiry(self):
        token = encode_token(
            {"sub": "a1b2c3d4e5", "type": "short"},
            "some-other-secret",
            timedelta(minutes=-1),
        )
        with pytest.raises(TokenExpiredError):
            decode_short_token(token)

    def test_bad_signature(self):
        token = encode_token(
            {"sub": "a1b2c3d4e5", "type": "short"},
            "some-other-secret",
            timedelta(minutes=5),
        )
        with pytest.raises(TokenInvalidError):
            decode_short_token(token)

    def test_missing_subject(self):
        token = encode_token({"type": "short"}, settings.short_token_secret, timedelta(minutes=5))
        with pytest.raises(TokenInvalidError):
            decode_short_token(token)

    def test_garbage_token(self):
        with pytest.raises(TokenInvalidError):
            decode_short_token("garbage")

    def test_algorithm_is_configured_algorithm(self):
        token = issue_long_lived_token("a1b2c3d4e5", "root", "admin")
        assert jwt.get_unverified_header(token)["alg"] == settings.jwt_algorithm
