"""
User Repository

Database operations for user management.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.modules.shared.repository import count, flush_unique
from school_admin.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str | None = None,
        role: UserRole = UserRole.READONLY,
    ) -> User:
        """
        Create a new user record.

        Args:
            db: Database session
            username: Login name (unique)
            email: User's email address (unique)
            password_hash: Hashed password
            first_name: User's first name
            last_name: User's last name (optional)
            role: User's role

        Returns:
            Created User instance

        Raises:
            DuplicateRecordError: If username or email is already taken
        """
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )

        db.add(user)
        await flush_unique(db, user, "users")

        logger.info(f"Created user: {user.id} - {user.username} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
        """Get a user by ID."""
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_login(
        db: AsyncSession,
        *,
        username: str | None = None,
        email: str | None = None,
    ) -> User | None:
        """
        Get a user by username or email, whichever is given.

        Args:
            db: Database session
            username: Login name
            email: Email address

        Returns:
            User instance or None if not found
        """
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None

        result = await db.execute(select(User).where(or_(*conditions)).limit(1))
        return result.scalars().first()

    @staticmethod
    async def find_conflicting(
        db: AsyncSession,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: str | None = None,
    ) -> User | None:
        """Return a user other than ``exclude_id`` already holding ``username`` or ``email``."""
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None

        query = select(User).where(or_(*conditions))
        if exclude_id:
            query = query.where(User.id != exclude_id)

        result = await db.execute(query.limit(1))
        return result.scalars().first()

    @staticmethod
    async def get_page(
        db: AsyncSession,
        *,
        user_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        """
        Get users with optional id filter and pagination, newest first.

        Returns:
            Tuple of (list of users, total count matching filters)
        """
        query = select(User)
        if user_id:
            query = query.where(User.id == user_id)

        total = await count(db, query)

        result = await db.execute(query.order_by(User.created_at.desc()).offset(skip).limit(limit))
        return list(result.scalars().all()), total

    @staticmethod
    async def update(db: AsyncSession, user: User, changes: dict) -> User:
        """
        Apply ``changes`` (column name -> value) to ``user``.

        Raises:
            DuplicateRecordError: If the new username or email is already taken
        """
        for field, value in changes.items():
            setattr(user, field, value)

        await flush_unique(db, user, "users")

        logger.info(f"Updated user {user.id}: {sorted(changes)}")
        return user
