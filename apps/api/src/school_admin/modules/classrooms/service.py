"""
Classroom Service Layer

Business logic for classrooms. A classroom must reference an existing
school and its name must be unique within that school.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.core.schemas import Pagination
from school_admin.modules.classrooms.models import Classroom
from school_admin.modules.classrooms.repository import ClassroomRepository
from school_admin.modules.classrooms.schemas import ClassroomCreate, ClassroomUpdate
from school_admin.modules.schools.repository import SchoolRepository
from school_admin.modules.shared.repository import DuplicateRecordError

logger = logging.getLogger(__name__)

DUPLICATE_CLASSROOM_MESSAGE = "The specified classroom in this school already exists."
SCHOOL_MISSING_MESSAGE = "The specified schoolId does not exist."
CLASSROOM_NOT_FOUND_MESSAGE = "Classroom not found."


async def _ensure_school_exists(db: AsyncSession, school_id: str) -> None:
    if not await SchoolRepository.get_by_id(db, school_id):
        raise NotFoundError(SCHOOL_MISSING_MESSAGE)


async def create_classroom(db: AsyncSession, data: ClassroomCreate) -> Classroom:
    """
    Create a classroom in an existing school.

    Raises:
        NotFoundError: If the school does not exist
        ConflictError: If the school already has a classroom with this name
    """
    await _ensure_school_exists(db, data.school_id)

    if await ClassroomRepository.get_by_name(db, name=data.name, school_id=data.school_id):
        logger.warning(f"Duplicate classroom '{data.name}' in school {data.school_id}")
        raise ConflictError(DUPLICATE_CLASSROOM_MESSAGE)

    try:
        return await ClassroomRepository.create(
            db,
            name=data.name,
            school_id=data.school_id,
            capacity=data.capacity,
            managed_by=data.managed_by,
            resources=data.resources,
        )
    except DuplicateRecordError as e:
        # A concurrent request created the same classroom first
        raise ConflictError(DUPLICATE_CLASSROOM_MESSAGE) from e


async def list_classrooms(
    db: AsyncSession,
    page: PageParams,
    classroom_id: str | None = None,
    school_id: str | None = None,
) -> tuple[list[Classroom], Pagination]:
    """
    Get a page of classrooms filtered by id and/or school.

    Raises:
        NotFoundError: If no classroom matches
    """
    classrooms, total = await ClassroomRepository.get_page(
        db,
        classroom_id=classroom_id,
        school_id=school_id,
        skip=page.offset,
        limit=page.limit,
    )
    if not classrooms:
        raise NotFoundError("Classroom(s) not found.")
    return classrooms, page.to_pagination(total)


async def update_classroom(
    db: AsyncSession,
    classroom_id: str | None,
    data: ClassroomUpdate,
) -> Classroom:
    """
    Update whitelisted classroom fields.

    Raises:
        ValidationError: If no id or no updatable field is given
        NotFoundError: If the classroom or the new school does not exist
        ConflictError: If the new (name, school) pair is taken
    """
    if not classroom_id:
        raise ValidationError("Classroom ID is required to perform update.")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("No valid fields provided for update.")

    classroom = await ClassroomRepository.get_by_id(db, classroom_id)
    if not classroom:
        raise NotFoundError(CLASSROOM_NOT_FOUND_MESSAGE)

    if "school_id" in changes:
        await _ensure_school_exists(db, changes["school_id"])

    if "name" in changes or "school_id" in changes:
        clash = await ClassroomRepository.get_by_name(
            db,
            name=changes.get("name", classroom.name),
            school_id=changes.get("school_id", classroom.school_id),
            exclude_id=classroom.id,
        )
        if clash:
            raise ConflictError(DUPLICATE_CLASSROOM_MESSAGE)

    try:
        return await ClassroomRepository.update(db, classroom, changes)
    except DuplicateRecordError as e:
        raise ConflictError(DUPLICATE_CLASSROOM_MESSAGE) from e


async def delete_classroom(db: AsyncSession, classroom_id: str | None) -> Classroom:
    """
    Delete a classroom and return the removed record.

    Raises:
        ValidationError: If no id is given
        NotFoundError: If the classroom does not exist
    """
    if not classroom_id:
        raise ValidationError("Classroom ID is required to perform delete.")

    classroom = await ClassroomRepository.get_by_id(db, classroom_id)
    if not classroom:
        raise NotFoundError(CLASSROOM_NOT_FOUND_MESSAGE)

    await ClassroomRepository.delete(db, classroom)
    return classroom
