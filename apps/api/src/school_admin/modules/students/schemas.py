"""Student schemas."""

from datetime import date, datetime

from pydantic import EmailStr, Field

from school_admin.core.schemas import CamelModel


class ParentContact(CamelModel):
    phone: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class StudentProfile(CamelModel):
    """Optional student profile stored as JSON."""

    address: str = Field(..., min_length=1)
    parent_contact: ParentContact


class TransferRecord(CamelModel):
    """One classroom reassignment."""

    from_classroom_id: str
    to_classroom_id: str
    transfer_date: datetime


class StudentCreate(CamelModel):
    """Request body for POST /student. The transfer history always starts empty."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    dob: date
    school_id: str = Field(..., min_length=1, max_length=32)
    classroom_id: str = Field(..., min_length=1, max_length=32)
    enrollment_date: datetime
    profile: StudentProfile | None = None


class StudentUpdate(CamelModel):
    """Updatable student fields. Anything else in the body is ignored."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    dob: date | None = None
    school_id: str | None = Field(None, min_length=1, max_length=32)
    classroom_id: str | None = Field(None, min_length=1, max_length=32)
    enrollment_date: datetime | None = None
    profile: StudentProfile | None = None


class StudentResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    dob: date
    school_id: str
    classroom_id: str
    enrollment_date: datetime
    transfer_history: list[TransferRecord] = Field(default_factory=list)
    profile: StudentProfile | None = None
    created_at: datetime
    updated_at: datetime
