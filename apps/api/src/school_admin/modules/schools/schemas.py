"""School schemas."""

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from school_admin.core.schemas import CamelModel
from school_admin.modules.shared.models import utc_now

MIN_ESTABLISHED_YEAR = 1800
WEBSITE_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$")


def _check_established_year(value: int | None) -> int | None:
    if value is None:
        return value
    current_year = utc_now().year
    if not MIN_ESTABLISHED_YEAR <= value <= current_year:
        raise ValueError(
            f"establishedYear must be between {MIN_ESTABLISHED_YEAR} and {current_year}."
        )
    return value


def _strip_required_text(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Field cannot be blank.")
    return value


def _check_website(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not WEBSITE_PATTERN.match(value):
        raise ValueError("website must be a valid http or https URL.")
    return value


class SchoolCreate(CamelModel):
    """Request body for POST /school."""

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    established_year: int
    website: str | None = Field(None, max_length=500)
    additional_info: str | None = None

    @field_validator("name", "address", "phone")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return _strip_required_text(value)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return str(value).lower()

    @field_validator("established_year")
    @classmethod
    def validate_established_year(cls, value: int) -> int:
        return _check_established_year(value)

    @field_validator("website")
    @classmethod
    def validate_website(cls, value: str | None) -> str | None:
        return _check_website(value)


class SchoolUpdate(CamelModel):
    """Updatable school fields. Anything else in the body is ignored."""

    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, min_length=1)
    phone: str | None = Field(None, min_length=1, max_length=30)
    email: EmailStr | None = None
    established_year: int | None = None
    website: str | None = Field(None, max_length=500)
    additional_info: str | None = None

    @field_validator("name", "address", "phone")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return _strip_required_text(value)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return str(value).lower() if value is not None else None

    @field_validator("established_year")
    @classmethod
    def validate_established_year(cls, value: int | None) -> int | None:
        return _check_established_year(value)

    @field_validator("website")
    @classmethod
    def validate_website(cls, value: str | None) -> str | None:
        return _check_website(value)


class SchoolResponse(CamelModel):
    id: str
    name: str
    address: str
    phone: str
    email: str
    established_year: int
    website: str | None = None
    additional_info: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime
