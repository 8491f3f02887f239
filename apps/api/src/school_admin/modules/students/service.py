"""
Student Service Layer

Business logic for students. A student's school and classroom must exist
and the classroom must belong to the school. Moving a student to another
classroom appends one entry to the transfer history.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.errors import NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.core.schemas import Pagination
from school_admin.modules.classrooms.repository import ClassroomRepository
from school_admin.modules.schools.repository import SchoolRepository
from school_admin.modules.shared.models import utc_now
from school_admin.modules.students.models import Student
from school_admin.modules.students.repository import StudentRepository
from school_admin.modules.students.schemas import StudentCreate, StudentUpdate, TransferRecord

logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND_MESSAGE = "Student not found."


async def _check_enrollment(db: AsyncSession, school_id: str, classroom_id: str) -> None:
    """
    Raises:
        NotFoundError: If the school or classroom does not exist
        ValidationError: If the classroom belongs to another school
    """
    if not await SchoolRepository.get_by_id(db, school_id):
        raise NotFoundError("The specified schoolId does not exist.")

    classroom = await ClassroomRepository.get_by_id(db, classroom_id)
    if not classroom:
        raise NotFoundError("The specified classroomId does not exist.")

    if classroom.school_id != school_id:
        raise ValidationError(
            "The specified classroomId does not belong to the specified schoolId."
        )


async def create_student(db: AsyncSession, data: StudentCreate) -> Student:
    """
    Enroll a student in an existing classroom.

    Raises:
        NotFoundError: If the school or classroom does not exist
        ValidationError: If the classroom belongs to another school
    """
    await _check_enrollment(db, data.school_id, data.classroom_id)

    return await StudentRepository.create(
        db,
        first_name=data.first_name,
        last_name=data.last_name,
        dob=data.dob,
        school_id=data.school_id,
        classroom_id=data.classroom_id,
        enrollment_date=data.enrollment_date,
        profile=data.profile.model_dump(by_alias=True, mode="json") if data.profile else None,
    )


async def list_students(
    db: AsyncSession,
    page: PageParams,
    student_id: str | None = None,
    school_id: str | None = None,
    classroom_id: str | None = None,
) -> tuple[list[Student], Pagination]:
    """
    Get a page of students filtered by id, school and/or classroom.

    Raises:
        NotFoundError: If no student matches
    """
    students, total = await StudentRepository.get_page(
        db,
        student_id=student_id,
        school_id=school_id,
        classroom_id=classroom_id,
        skip=page.offset,
        limit=page.limit,
    )
    if not students:
        raise NotFoundError("Student(s) not found.")
    return students, page.to_pagination(total)


async def update_student(
    db: AsyncSession,
    student_id: str | None,
    data: StudentUpdate,
) -> Student:
    """
    Update whitelisted student fields.

    When ``classroom_id`` differs from the current classroom, exactly one
    transfer record is appended.

    Raises:
        ValidationError: If no id or no updatable field is given, or the
            resulting classroom belongs to another school
        NotFoundError: If the student, school or classroom does not exist
    """
    if not student_id:
        raise ValidationError("Student ID is required to perform update.")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("No valid fields provided for update.")

    student = await StudentRepository.get_by_id(db, student_id)
    if not student:
        raise NotFoundError(STUDENT_NOT_FOUND_MESSAGE)

    if "school_id" in changes or "classroom_id" in changes:
        await _check_enrollment(
            db,
            changes.get("school_id", student.school_id),
            changes.get("classroom_id", student.classroom_id),
        )

    if data.profile is not None:
        changes["profile"] = data.profile.model_dump(by_alias=True, mode="json")

    new_classroom_id = changes.get("classroom_id")
    if new_classroom_id and new_classroom_id != student.classroom_id:
        transfer = TransferRecord(
            from_classroom_id=student.classroom_id,
            to_classroom_id=new_classroom_id,
            transfer_date=utc_now(),
        )
        changes["transfer_history"] = [
            *(student.transfer_history or []),
            transfer.model_dump(by_alias=True, mode="json"),
        ]
        logger.info(
            f"Transferring student {student.id}: {student.classroom_id} -> {new_classroom_id}"
        )

    return await StudentRepository.update(db, student, changes)


async def delete_student(db: AsyncSession, student_id: str | None) -> Student:
    """
    Delete a student and return the removed record.

    Raises:
        ValidationError: If no id is given
        NotFoundError: If the student does not exist
    """
    if not student_id:
        raise ValidationError("Student ID is required to perform delete.")

    student = await StudentRepository.get_by_id(db, student_id)
    if not student:
        raise NotFoundError(STUDENT_NOT_FOUND_MESSAGE)

    await StudentRepository.delete(db, student)
    return student
