"""
Authentication Service

Credential checks for login and the long-token to short-token exchange.
Tokens are stateless: nothing is persisted on login or refresh.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.errors import (
    ExpiredCredentialError,
    InvalidCredentialError,
    NotFoundError,
)
from school_admin.core.security import (
    TokenExpiredError,
    TokenInvalidError,
    decode_long_token,
    issue_long_lived_token,
    issue_short_lived_token,
    verify_password,
)
from school_admin.modules.auth.schemas import LoginData, LoginRequest, RefreshData, RefreshRequest
from school_admin.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

UNKNOWN_DEVICE = "unknown"


async def login(db: AsyncSession, data: LoginRequest, device: str = UNKNOWN_DEVICE) -> LoginData:
    """
    Authenticate by username or email and issue a token pair.

    Args:
        db: Database session
        data: Validated login body
        device: Device fingerprint bound into the short-lived token

    Raises:
        NotFoundError: If no account matches the identifier
        InvalidCredentialError: If the password does not match
    """
    identifier = data.username or data.email
    user = await UserRepository.get_by_login(db, username=data.username, email=data.email)

    if not user:
        logger.warning(f"Login attempt for unknown account: {identifier}")
        raise NotFoundError("User not found.")

    if not verify_password(data.password or "", user.password_hash):
        logger.warning(f"Invalid password for user: {user.username}")
        raise InvalidCredentialError("Invalid password.")

    long_token = issue_long_lived_token(user.id, user.username, user.role.value)
    short_token = issue_short_lived_token(long_token, device)

    logger.info(f"User logged in: {user.id} ({user.role.value})")
    return LoginData(
        username=user.username,
        role=user.role.value,
        long_token=long_token,
        short_token=short_token,
    )


def refresh(data: RefreshRequest, device: str = UNKNOWN_DEVICE) -> RefreshData:
    """
    Exchange a valid long-lived token for a new short-lived token.

    Raises:
        InvalidCredentialError: If the token is absent, malformed, or badly signed
        ExpiredCredentialError: If the token has expired
    """
    if not data.long_token:
        raise InvalidCredentialError("Long token is required.")

    try:
        payload = decode_long_token(data.long_token)
    except TokenExpiredError as e:
        logger.info("Refresh rejected: long token expired")
        raise ExpiredCredentialError("Long token has expired.") from e
    except TokenInvalidError as e:
        logger.warning(f"Refresh rejected: {e}")
        raise InvalidCredentialError("Invalid long token.") from e

    logger.debug(f"Issuing short token for subject {payload['sub']}")
    return RefreshData(short_token=issue_short_lived_token(data.long_token, device))
