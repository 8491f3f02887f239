"""
User Models

Database model for accounts used to authenticate against the API.
"""

from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column

from school_admin.modules.shared import BaseModel


class UserRole(str, Enum):
    """User roles in the system."""

    SUPER_ADMIN = "superadmin"
    ADMIN = "admin"
    READONLY = "readonly"


class User(BaseModel):
    """
    Account model for authentication and authorization.

    The id is a 10-character hex string. Username and email are unique at
    the storage level. Accounts are never deleted through the API.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Profile fields
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    last_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    role: Mapped[UserRole] = mapped_column(
        ENUM(
            UserRole,
            name="user_role",
            create_type=True,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=UserRole.READONLY,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role.value})>"
