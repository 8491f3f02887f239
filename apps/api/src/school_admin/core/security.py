"""
Security Utilities

Password hashing (bcrypt) and JWT signing/verification (PyJWT) shared by the
token issuer, the refresher and the access guard.

Two token kinds are issued, each with its own secret:
- long token: ``{sub, key, role, type="long"}``, expires in days
- short token: ``{sub, key, role, ltk, device, type="short"}``, expires in
  minutes, derived from a long token
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from school_admin.core.config import settings

LONG_TOKEN_TYPE = "long"
SHORT_TOKEN_TYPE = "short"


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """The token's ``exp`` claim is in the past."""


class TokenInvalidError(TokenError):
    """The token is malformed, tampered with, or of the wrong type."""


# ============================================
# Passwords
# ============================================


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password with a fresh salt."""
    # bcrypt only uses the first 72 bytes
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# ============================================
# Signing and verification
# ============================================


def encode_token(payload: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
    """Sign ``payload`` with ``secret``, adding ``iat`` and ``exp`` claims."""
    now = datetime.now(UTC)
    claims = {**payload, "iat": now, "exp": now + expires_delta}
    return jwt.encode(claims, secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, secret: str, expected_type: str | None = None) -> dict[str, Any]:
    """
    Verify and decode a token.

    Expiry is reported for any token whose ``exp`` has passed, even when the
    signature does not verify.

    Args:
        token: Encoded JWT
        secret: Secret the token must be signed with
        expected_type: Required value of the ``type`` claim, if any

    Returns:
        The verified payload

    Raises:
        TokenExpiredError: If the token has expired
        TokenInvalidError: For any other verification failure
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        if _is_expired(token):
            raise TokenExpiredError("Token has expired") from e
        raise TokenInvalidError(str(e)) from e

    if expected_type is not None and payload.get("type") != expected_type:
        raise TokenInvalidError(f"Expected a {expected_type} token")
    if not payload.get("sub"):
        raise TokenInvalidError("Missing 'sub' claim in token")

    return payload


def read_unverified_claims(token: str) -> dict[str, Any]:
    """Read a token's claims without checking signature or expiry."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(str(e)) from e


def _is_expired(token: str) -> bool:
    try:
        exp = read_unverified_claims(token).get("exp")
    except TokenInvalidError:
        return False
    if not isinstance(exp, int | float):
        return False
    return datetime.fromtimestamp(exp, UTC) <= datetime.now(UTC)


# ============================================
# Token issuer
# ============================================


def issue_long_lived_token(subject_id: str, subject_key: str, role: str) -> str:
    """Sign the long-lived credential proving a successful login."""
    return encode_token(
        {"sub": subject_id, "key": subject_key, "role": role, "type": LONG_TOKEN_TYPE},
        settings.long_token_secret,
        timedelta(days=settings.long_token_expire_days),
    )


def issue_short_lived_token(long_token: str, device_fingerprint: str) -> str:
    """
    Derive a short-lived credential from a long-lived one.

    The long token's signature is NOT verified here; callers must only pass a
    long token they have just issued or verified.

    Raises:
        TokenInvalidError: If the long token cannot be parsed
    """
    claims = read_unverified_claims(long_token)
    return encode_token(
        {
            "sub": claims.get("sub"),
            "key": claims.get("key"),
            "role": claims.get("role"),
            "ltk": long_token,
            "device": device_fingerprint,
            "type": SHORT_TOKEN_TYPE,
        },
        settings.short_token_secret,
        timedelta(minutes=settings.short_token_expire_minutes),
    )


def decode_long_token(token: str) -> dict[str, Any]:
    """Verify a long-lived token. See ``decode_token`` for the raised errors."""
    return decode_token(token, settings.long_token_secret, LONG_TOKEN_TYPE)


def decode_short_token(token: str) -> dict[str, Any]:
    """Verify a short-lived token. See ``decode_token`` for the raised errors."""
    return decode_token(token, settings.short_token_secret, SHORT_TOKEN_TYPE)
