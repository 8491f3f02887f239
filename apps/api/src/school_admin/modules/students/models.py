"""
Student Models

A student is enrolled in one classroom of one school. Classroom changes are
recorded in ``transfer_history``.
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from school_admin.modules.shared import BaseModel


class Student(BaseModel):
    """Student model. Ids look like ``stid-3f9a0c1d2e``."""

    __tablename__ = "students"

    id_prefix = "stid"

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    dob: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    school_id: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
    )
    classroom_id: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
    )
    enrollment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # JSON array of {fromClassroomId, toClassroomId, transferDate} objects.
    # Append-only; assign a new list so the change is detected.
    transfer_history: Mapped[list[dict]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )

    # {address, parentContact: {phone, email}}
    profile: Mapped[dict | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.full_name}, classroom_id={self.classroom_id})>"
