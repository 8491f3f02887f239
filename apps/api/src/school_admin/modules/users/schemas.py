"""User schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from school_admin.core.schemas import CamelModel
from school_admin.modules.users.models import UserRole


class UserCreate(CamelModel):
    """Request body for POST /user (self-registration)."""

    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class UserUpdate(CamelModel):
    """Updatable user fields. Anything else in the body is ignored."""

    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1, max_length=128)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    role: UserRole | None = None


class UserResponse(CamelModel):
    """Public view of an account. Never includes credential material."""

    id: str
    username: str
    email: str
    first_name: str
    last_name: str | None = None
    role: UserRole
    created_at: datetime
    updated_at: datetime
