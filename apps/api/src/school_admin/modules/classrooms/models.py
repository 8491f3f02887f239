"""
Classroom Models

A classroom belongs to one school. Its name is unique within that school.
"""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from school_admin.modules.shared import BaseModel


class Classroom(BaseModel):
    """Classroom model. Ids look like ``clid-3f9a0c1d2e``."""

    __tablename__ = "classrooms"
    __table_args__ = (
        UniqueConstraint("name", "school_id", name="uq_classrooms_name_school_id"),
        CheckConstraint("capacity >= 1", name="ck_classrooms_capacity_positive"),
    )

    id_prefix = "clid"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    school_id: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # JSON array of resource names, e.g. ["projector", "whiteboard"]
    resources: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )

    # Subject id of the managing administrator
    managed_by: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Classroom(id={self.id}, name={self.name}, school_id={self.school_id})>"
