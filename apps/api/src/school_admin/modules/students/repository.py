"""
Student Repository

Database operations for student management.
"""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.modules.shared.repository import count
from school_admin.modules.students.models import Student

logger = logging.getLogger(__name__)


class StudentRepository:
    """Repository for student database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        first_name: str,
        last_name: str,
        dob: date,
        school_id: str,
        classroom_id: str,
        enrollment_date: datetime,
        profile: dict | None = None,
    ) -> Student:
        """
        Create a new student record with an empty transfer history.

        Args:
            db: Database session
            first_name: Student's first name
            last_name: Student's last name
            dob: Date of birth
            school_id: School the student is enrolled in
            classroom_id: Classroom the student is enrolled in
            enrollment_date: When the student enrolled
            profile: Address and parent contact (optional)

        Returns:
            Created Student instance
        """
        student = Student(
            first_name=first_name,
            last_name=last_name,
            dob=dob,
            school_id=school_id,
            classroom_id=classroom_id,
            enrollment_date=enrollment_date,
            transfer_history=[],
            profile=profile,
        )

        db.add(student)
        await db.flush()
        await db.refresh(student)

        logger.info(f"Created student: {student.id} in {school_id}/{classroom_id}")
        return student

    @staticmethod
    async def get_by_id(db: AsyncSession, student_id: str) -> Student | None:
        """Get a student by ID."""
        return await db.get(Student, student_id)

    @staticmethod
    async def get_page(
        db: AsyncSession,
        *,
        student_id: str | None = None,
        school_id: str | None = None,
        classroom_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Student], int]:
        """
        Get students with optional filters and pagination, newest first.

        Returns:
            Tuple of (list of students, total count matching filters)
        """
        query = select(Student)
        if student_id:
            query = query.where(Student.id == student_id)
        if school_id:
            query = query.where(Student.school_id == school_id)
        if classroom_id:
            query = query.where(Student.classroom_id == classroom_id)

        total = await count(db, query)

        result = await db.execute(
            query.order_by(Student.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def update(db: AsyncSession, student: Student, changes: dict) -> Student:
        """Apply ``changes`` (column name -> value) to ``student``."""
        for field, value in changes.items():
            setattr(student, field, value)

        await db.flush()
        await db.refresh(student)

        logger.info(f"Updated student {student.id}: {sorted(changes)}")
        return student

    @staticmethod
    async def delete(db: AsyncSession, student: Student) -> None:
        """Delete a student record."""
        await db.delete(student)
        await db.flush()

        logger.info(f"Deleted student: {student.id}")
