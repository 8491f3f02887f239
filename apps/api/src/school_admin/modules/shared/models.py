"""
Shared Model Base

Every table has a short external string id (optionally prefixed, e.g.
``scid-3f9a0c1d2e``) and created/updated timestamps.
"""

from datetime import UTC, datetime
from typing import ClassVar
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from school_admin.core.database import Base

SHORT_ID_LENGTH = 10


def generate_short_id(prefix: str = "") -> str:
    """Return ``<prefix>-<10 hex chars>``, or just the hex when no prefix."""
    short = uuid4().hex[:SHORT_ID_LENGTH]
    return f"{prefix}-{short}" if prefix else short


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseModel(Base):
    """Abstract base with id and timestamp columns."""

    __abstract__ = True

    # Subclasses set this to prefix their generated ids
    id_prefix: ClassVar[str] = ""

    @declared_attr
    def id(cls) -> Mapped[str]:
        prefix = cls.id_prefix
        return mapped_column(
            String(32),
            primary_key=True,
            default=lambda: generate_short_id(prefix),
        )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
