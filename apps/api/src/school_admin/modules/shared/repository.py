"""
Shared Repository Helpers

Writes go through ``flush_unique`` so that a unique-constraint violation
raised by the database surfaces as ``DuplicateRecordError`` instead of a
driver-specific ``IntegrityError``.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession


class DuplicateRecordError(ValueError):
    """Raised when a write violates a unique constraint."""

    def __init__(self, table: str, detail: str | None = None):
        self.table = table
        self.detail = detail
        super().__init__(f"Duplicate record in {table}" + (f": {detail}" if detail else ""))


async def flush_unique(db: AsyncSession, instance, table: str) -> None:
    """
    Flush pending changes and refresh ``instance``.

    Raises:
        DuplicateRecordError: If the flush violates a unique constraint
    """
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateRecordError(table, str(e.orig) if e.orig else None) from e
    await db.refresh(instance)


async def count(db: AsyncSession, query: Select) -> int:
    """Count the rows ``query`` would return."""
    result = await db.execute(select(func.count()).select_from(query.subquery()))
    return result.scalar() or 0
