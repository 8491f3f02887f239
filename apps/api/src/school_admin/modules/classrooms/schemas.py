"""Classroom schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from school_admin.core.schemas import CamelModel


def _clean_resources(value: list[str] | None) -> list[str] | None:
    if value is None:
        return value
    return [item.strip() for item in value if item and item.strip()]


class ClassroomCreate(CamelModel):
    """Request body for POST /classroom."""

    name: str = Field(..., min_length=1, max_length=200)
    school_id: str = Field(..., min_length=1, max_length=32)
    capacity: int = Field(..., ge=1)
    managed_by: str = Field(..., min_length=1, max_length=32)
    resources: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name cannot be blank.")
        return value

    @field_validator("resources")
    @classmethod
    def clean_resources(cls, value: list[str]) -> list[str]:
        return _clean_resources(value)


class ClassroomUpdate(CamelModel):
    """Updatable classroom fields. Anything else in the body is ignored."""

    name: str | None = Field(None, min_length=1, max_length=200)
    school_id: str | None = Field(None, min_length=1, max_length=32)
    capacity: int | None = Field(None, ge=1)
    managed_by: str | None = Field(None, min_length=1, max_length=32)
    resources: list[str] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name cannot be blank.")
        return value

    @field_validator("resources")
    @classmethod
    def clean_resources(cls, value: list[str] | None) -> list[str] | None:
        return _clean_resources(value)


class ClassroomResponse(CamelModel):
    id: str
    name: str
    school_id: str
    capacity: int
    resources: list[str]
    managed_by: str
    created_at: datetime
    updated_at: datetime
