"""
User Service Layer

Account registration, listing and updates. Passwords are hashed before they
reach the repository and are re-hashed whenever a new plaintext password is
supplied.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.core.schemas import Pagination
from school_admin.core.security import hash_password
from school_admin.modules.shared.repository import DuplicateRecordError
from school_admin.modules.users.models import User
from school_admin.modules.users.repository import UserRepository
from school_admin.modules.users.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "A user with the same username or email already exists."


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """
    Register a new account with the default (readonly) role.

    Raises:
        ConflictError: If the username or email is already taken
    """
    existing = await UserRepository.find_conflicting(
        db, username=data.username, email=str(data.email)
    )
    if existing:
        logger.warning(f"Registration rejected, duplicate username/email: {data.username}")
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    try:
        return await UserRepository.create(
            db,
            username=data.username,
            email=str(data.email),
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )
    except DuplicateRecordError as e:
        # Lost a race with a concurrent registration
        logger.warning(f"Registration rejected by unique constraint: {data.username}")
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e


async def list_users(
    db: AsyncSession,
    page: PageParams,
    user_id: str | None = None,
) -> tuple[list[User], Pagination]:
    """
    Get a page of users.

    Raises:
        NotFoundError: If no user matches
    """
    users, total = await UserRepository.get_page(
        db, user_id=user_id, skip=page.offset, limit=page.limit
    )
    if not users:
        raise NotFoundError("User(s) not found.")
    return users, page.to_pagination(total)


async def update_user(db: AsyncSession, user_id: str | None, data: UserUpdate) -> User:
    """
    Update whitelisted account fields.

    Raises:
        ValidationError: If no id or no updatable field is given
        NotFoundError: If the user does not exist
        ConflictError: If the new email is already taken
    """
    if not user_id:
        raise ValidationError("User ID is required to perform update.")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("No valid fields provided for update.")

    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found.")

    if "email" in changes:
        changes["email"] = str(changes["email"])
        if await UserRepository.find_conflicting(db, email=changes["email"], exclude_id=user.id):
            raise ConflictError(DUPLICATE_USER_MESSAGE)

    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))

    try:
        return await UserRepository.update(db, user, changes)
    except DuplicateRecordError as e:
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
