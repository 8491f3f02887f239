"""
Unit tests for login and token refresh.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from school_admin.core.config import settings
from school_admin.core.errors import ExpiredCredentialError, InvalidCredentialError, NotFoundError
from school_admin.core.security import (
    decode_long_token,
    decode_short_token,
    encode_token,
    hash_password,
    issue_long_lived_token,
    issue_short_lived_token,
)
from school_admin.modules.auth.schemas import LoginRequest, RefreshRequest
from school_admin.modules.auth.service import login, refresh
from school_admin.modules.users.models import User, UserRole


@pytest.fixture
def stored_user():
    return User(
        id="a1b2c3d4e5",
        username="jdoe",
        email="jdoe@example.com",
        password_hash=hash_password("hunter22"),
        first_name="Jane",
        role=UserRole.ADMIN,
    )


class TestLoginRequest:
    def test_requires_identifier(self):
        with pytest.raises(ValueError, match="Username or email and password are required."):
            LoginRequest(password="hunter22")

    def test_requires_password(self):
        with pytest.raises(ValueError, match="Username or email and password are required."):
            LoginRequest(username="jdoe")

    def test_email_alone_is_enough(self):
        assert LoginRequest(email="jdoe@example.com", password="x").email == "jdoe@example.com"


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success(self, mock_db, stored_user):
        with patch("school_admin.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_login = AsyncMock(return_value=stored_user)

            result = await login(
                mock_db, LoginRequest(username="jdoe", password="hunter22"), "Mozilla/5.0"
            )

        assert result.username == "jdoe"
        assert result.role == "admin"

        long_claims = decode_long_token(result.long_token)
        assert long_claims["sub"] == "a1b2c3d4e5"
        assert long_claims["key"] == "jdoe"

        short_claims = decode_short_token(result.short_token)
        assert short_claims["ltk"] == result.long_token
        assert short_claims["device"] == "Mozilla/5.0"

    @pytest.mark.asyncio
    async def test_login_by_email(self, mock_db, stored_user):
        with patch("school_admin.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_login = AsyncMock(return_value=stored_user)

            await login(mock_db, LoginRequest(email="jdoe@example.com", password="hunter22"))

            mock_repo.get_by_login.assert_called_once_with(
                mock_db, username=None, email="jdoe@example.com"
            )

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db):
        with patch("school_admin.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_login = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await login(mock_db, LoginRequest(username="ghost", password="x"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "User not found."

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, stored_user):
        with patch("school_admin.modules.auth.service.UserRepository") as mock_repo:
            mock_repo.get_by_login = AsyncMock(return_value=stored_user)

            with pytest.raises(InvalidCredentialError) as exc_info:
                await login(mock_db, LoginRequest(username="jdoe", password="wrong"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid password."


class TestRefresh:
    """Tests for refresh."""

    def test_refresh_success(self):
        long_token = issue_long_lived_token("a1b2c3d4e5", "jdoe", "admin")

        result = refresh(RefreshRequest(long_token=long_token), "device-1")

        claims = decode_short_token(result.short_token)
        assert claims["sub"] == "a1b2c3d4e5"
        assert claims["ltk"] == long_token
        assert claims["device"] == "device-1"

    def test_missing_token(self):
        with pytest.raises(InvalidCredentialError) as exc_info:
            refresh(RefreshRequest())

        assert exc_info.value.message == "Long token is required."

    def test_expired_token(self):
        token = encode_token(
            {"sub": "a1b2c3d4e5", "key": "jdoe", "role": "admin", "type": "long"},
            settings.long_token_secret,
            timedelta(days=-1),
        )

        with pytest.raises(ExpiredCredentialError) as exc_info:
            refresh(RefreshRequest(long_token=token))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Long token has expired."

    def test_bad_signature(self):
        token = encode_token(
            {"sub": "a1b2c3d4e5", "key": "jdoe", "role": "admin", "type": "long"},
            "not-the-long-secret",
            timedelta(days=1),
        )

        with pytest.raises(InvalidCredentialError) as exc_info:
            refresh(RefreshRequest(long_token=token))

        assert exc_info.value.message == "Invalid long token."

    def test_short_token_cannot_refresh(self):
        long_token = issue_long_lived_token("a1b2c3d4e5", "jdoe", "admin")
        short_token = issue_short_lived_token(long_token, "device")

        with pytest.raises(InvalidCredentialError) as exc_info:
            refresh(RefreshRequest(long_token=short_token))

        assert exc_info.value.message == "Invalid long token."
