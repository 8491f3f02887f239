"""
Unit tests for the user service layer.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.core.security import verify_password
from school_admin.modules.shared.models import utc_now
from school_admin.modules.shared.repository import DuplicateRecordError
from school_admin.modules.users.models import User, UserRole
from school_admin.modules.users.schemas import UserCreate, UserResponse, UserUpdate
from school_admin.modules.users.service import (
    DUPLICATE_USER_MESSAGE,
    create_user,
    list_users,
    update_user,
)


@pytest.fixture
def sample_user():
    now = utc_now()
    return User(
        id="a1b2c3d4e5",
        username="jdoe",
        email="jdoe@example.com",
        password_hash="$2b$04$notarealhash",
        first_name="Jane",
        last_name="Doe",
        role=UserRole.READONLY,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_user_create():
    return UserCreate(
        username="jdoe",
        email="jdoe@example.com",
        password="hunter22",
        first_name="Jane",
        last_name="Doe",
    )


class TestCreateUser:
    """Tests for create_user."""

    @pytest.mark.asyncio
    async def test_create_hashes_password(self, mock_db, sample_user_create, sample_user):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=sample_user)

            result = await create_user(mock_db, sample_user_create)

            assert result is sample_user
            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["username"] == "jdoe"
            assert kwargs["password_hash"] != "hunter22"
            assert verify_password("hunter22", kwargs["password_hash"])
            assert "role" not in kwargs

    @pytest.mark.asyncio
    async def test_duplicate_username_or_email(self, mock_db, sample_user_create, sample_user):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=sample_user)
            mock_repo.create = AsyncMock()

            with pytest.raises(ConflictError) as exc_info:
                await create_user(mock_db, sample_user_create)

            assert exc_info.value.status_code == 409
            assert exc_info.value.message == DUPLICATE_USER_MESSAGE
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_constraint_race(self, mock_db, sample_user_create):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.find_conflicting = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=DuplicateRecordError("users"))

            with pytest.raises(ConflictError):
                await create_user(mock_db, sample_user_create)


class TestListUsers:
    """Tests for list_users."""

    @pytest.mark.asyncio
    async def test_returns_page(self, mock_db, sample_user):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.get_page = AsyncMock(return_value=([sample_user], 11))

            users, pagination = await list_users(mock_db, PageParams(page=2, limit=10))

            assert users == [sample_user]
            assert pagination.total_pages == 2
            mock_repo.get_page.assert_called_once_with(mock_db, user_id=None, skip=10, limit=10)

    @pytest.mark.asyncio
    async def test_empty_is_not_found(self, mock_db):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.get_page = AsyncMock(return_value=([], 0))

            with pytest.raises(NotFoundError) as exc_info:
                await list_users(mock_db, PageParams(), user_id="missing")

            assert exc_info.value.message == "User(s) not found."


class TestUpdateUser:
    """Tests for update_user."""

    @pytest.mark.asyncio
    async def test_missing_id(self, mock_db):
        with pytest.raises(ValidationError) as exc_info:
            await update_user(mock_db, None, UserUpdate(first_name="X"))

        assert exc_info.value.message == "User ID is required to perform update."

    @pytest.mark.asyncio
    async def test_no_whitelisted_fields(self, mock_db):
        data = UserUpdate.model_validate({"username": "hijack", "passwordHash": "x"})

        with pytest.raises(ValidationError) as exc_info:
            await update_user(mock_db, "a1b2c3d4e5", data)

        assert exc_info.value.message == "No valid fields provided for update."

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await update_user(mock_db, "a1b2c3d4e5", UserUpdate(first_name="X"))

            assert exc_info.value.message == "User not found."

    @pytest.mark.asyncio
    async def test_password_is_rehashed(self, mock_db, sample_user):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_user)
            mock_repo.update = AsyncMock(return_value=sample_user)

            await update_user(
                mock_db, sample_user.id, UserUpdate(password="n3w-pass", role=UserRole.ADMIN)
            )

            changes = mock_repo.update.call_args.args[2]
            assert "password" not in changes
            assert verify_password("n3w-pass", changes["password_hash"])
            assert changes["role"] == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user(self, mock_db, sample_user):
        with patch("school_admin.modules.users.service.UserRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_user)
            mock_repo.find_conflicting = AsyncMock(return_value=MagicMock(spec=User))
            mock_repo.update = AsyncMock()

            with pytest.raises(ConflictError):
                await update_user(mock_db, sample_user.id, UserUpdate(email="taken@example.com"))

            mock_repo.find_conflicting.assert_called_once_with(
                mock_db, email="taken@example.com", exclude_id=sample_user.id
            )
            mock_repo.update.assert_not_called()


class TestUserResponse:
    def test_never_exposes_password(self, sample_user):
        body = UserResponse.model_validate(sample_user).model_dump(by_alias=True)

        assert "passwordHash" not in body
        assert "password" not in body
        assert body["firstName"] == "Jane"
        assert body["role"] == UserRole.READONLY
