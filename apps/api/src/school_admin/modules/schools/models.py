"""
School Models

Each school is a tenant. Classrooms and students reference it by id.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from school_admin.modules.shared import BaseModel


class School(BaseModel):
    """
    School tenant model.

    ``name`` and ``email`` are each unique across all schools. Ids look like
    ``scid-3f9a0c1d2e``.
    """

    __tablename__ = "schools"

    id_prefix = "scid"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        unique=True,
    )
    address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Contact information
    phone: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    # Profile
    established_year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    website: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )
    additional_info: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Subject id of the account that created the school
    created_by: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name})>"
