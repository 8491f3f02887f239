"""
School Repository

Database operations for school management.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.modules.schools.models import School
from school_admin.modules.shared.repository import count, flush_unique

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        address: str,
        phone: str,
        email: str,
        established_year: int,
        created_by: str,
        website: str | None = None,
        additional_info: str | None = None,
    ) -> School:
        """
        Create a new school record.

        Args:
            db: Database session
            name: School name (unique)
            address: Full address
            phone: School phone number
            email: School email address (unique)
            established_year: Year the school was established
            created_by: Subject id of the creating account
            website: School website (optional)
            additional_info: Free-form notes (optional)

        Returns:
            Created School instance

        Raises:
            DuplicateRecordError: If name or email is already taken
        """
        school = School(
            name=name,
            address=address,
            phone=phone,
            email=email,
            established_year=established_year,
            website=website,
            additional_info=additional_info,
            created_by=created_by,
        )

        db.add(school)
        await flush_unique(db, school, "schools")

        logger.info(f"Created school: {school.id} - {school.name}")
        return school

    @staticmethod
    async def get_by_id(db: AsyncSession, school_id: str) -> School | None:
        """Get a school by ID."""
        return await db.get(School, school_id)

    @staticmethod
    async def find_conflicting(
        db: AsyncSession,
        *,
        name: str | None = None,
        email: str | None = None,
        exclude_id: str | None = None,
    ) -> School | None:
        """Return a school other than ``exclude_id`` already holding ``name`` or ``email``."""
        conditions = []
        if name:
            conditions.append(School.name == name)
        if email:
            conditions.append(School.email == email)
        if not conditions:
            return None

        query = select(School).where(or_(*conditions))
        if exclude_id:
            query = query.where(School.id != exclude_id)

        result = await db.execute(query.limit(1))
        return result.scalars().first()

    @staticmethod
    async def get_page(
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[School], int]:
        """
        Get schools, newest first.

        Returns:
            Tuple of (list of schools, total count)
        """
        query = select(School)
        total = await count(db, query)

        result = await db.execute(
            query.order_by(School.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def update(db: AsyncSession, school: School, changes: dict) -> School:
        """
        Apply ``changes`` (column name -> value) to ``school``.

        Raises:
            DuplicateRecordError: If the new name or email is already taken
        """
        for field, value in changes.items():
            setattr(school, field, value)

        await flush_unique(db, school, "schools")

        logger.info(f"Updated school {school.id}: {sorted(changes)}")
        return school

    @staticmethod
    async def delete(db: AsyncSession, school: School) -> None:
        """Delete a school record."""
        await db.delete(school)
        await db.flush()

        logger.info(f"Deleted school: {school.id} - {school.name}")
