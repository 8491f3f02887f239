"""
Classroom Repository

Database operations for classroom management.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.modules.classrooms.models import Classroom
from school_admin.modules.shared.repository import count, flush_unique

logger = logging.getLogger(__name__)


class ClassroomRepository:
    """Repository for classroom database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        school_id: str,
        capacity: int,
        managed_by: str,
        resources: list[str] | None = None,
    ) -> Classroom:
        """
        Create a new classroom record.

        Raises:
            DuplicateRecordError: If the school already has a classroom with this name
        """
        classroom = Classroom(
            name=name,
            school_id=school_id,
            capacity=capacity,
            managed_by=managed_by,
            resources=resources or [],
        )

        db.add(classroom)
        await flush_unique(db, classroom, "classrooms")

        logger.info(f"Created classroom: {classroom.id} - {classroom.name} in {school_id}")
        return classroom

    @staticmethod
    async def get_by_id(db: AsyncSession, classroom_id: str) -> Classroom | None:
        """Get a classroom by ID."""
        return await db.get(Classroom, classroom_id)

    @staticmethod
    async def get_by_name(
        db: AsyncSession,
        *,
        name: str,
        school_id: str,
        exclude_id: str | None = None,
    ) -> Classroom | None:
        """Get the classroom named ``name`` in ``school_id``, ignoring ``exclude_id``."""
        query = select(Classroom).where(
            Classroom.name == name,
            Classroom.school_id == school_id,
        )
        if exclude_id:
            query = query.where(Classroom.id != exclude_id)

        result = await db.execute(query.limit(1))
        return result.scalars().first()

    @staticmethod
    async def get_page(
        db: AsyncSession,
        *,
        classroom_id: str | None = None,
        school_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Classroom], int]:
        """
        Get classrooms with optional filters and pagination, newest first.

        Returns:
            Tuple of (list of classrooms, total count matching filters)
        """
        query = select(Classroom)
        if classroom_id:
            query = query.where(Classroom.id == classroom_id)
        if school_id:
            query = query.where(Classroom.school_id == school_id)

        total = await count(db, query)

        result = await db.execute(
            query.order_by(Classroom.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def update(db: AsyncSession, classroom: Classroom, changes: dict) -> Classroom:
        """
        Apply ``changes`` (column name -> value) to ``classroom``.

        Raises:
            DuplicateRecordError: If the new (name, school_id) pair is taken
        """
        for field, value in changes.items():
            setattr(classroom, field, value)

        await flush_unique(db, classroom, "classrooms")

        logger.info(f"Updated classroom {classroom.id}: {sorted(changes)}")
        return classroom

    @staticmethod
    async def delete(db: AsyncSession, classroom: Classroom) -> None:
        """Delete a classroom record."""
        await db.delete(classroom)
        await db.flush()

        logger.info(f"Deleted classroom: {classroom.id}")
