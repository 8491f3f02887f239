"""
School Service Layer

Business logic for school tenants: creation with duplicate checks,
lookup, paginated listing, whitelisted updates and deletion.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.pagination import PageParams
from school_admin.core.schemas import Pagination
from school_admin.modules.schools.models import School
from school_admin.modules.schools.repository import SchoolRepository
from school_admin.modules.schools.schemas import SchoolCreate, SchoolUpdate
from school_admin.modules.shared.repository import DuplicateRecordError

logger = logging.getLogger(__name__)

DUPLICATE_SCHOOL_MESSAGE = "A school with the same name or email already exists."
SCHOOL_NOT_FOUND_MESSAGE = "School not found with the given ID."


async def create_school(db: AsyncSession, data: SchoolCreate, created_by: str) -> School:
    """
    Create a school.

    Args:
        db: Database session
        data: Validated school fields
        created_by: Subject id of the caller

    Raises:
        ConflictError: If another school already has the name or email
    """
    if await SchoolRepository.find_conflicting(db, name=data.name, email=str(data.email)):
        logger.warning(f"School creation rejected, duplicate name/email: {data.name}")
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE)

    try:
        return await SchoolRepository.create(
            db,
            name=data.name,
            address=data.address,
            phone=data.phone,
            email=str(data.email),
            established_year=data.established_year,
            website=data.website,
            additional_info=data.additional_info,
            created_by=created_by,
        )
    except DuplicateRecordError as e:
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE) from e


async def get_school(db: AsyncSession, school_id: str) -> School:
    """
    Raises:
        NotFoundError: If the school does not exist
    """
    school = await SchoolRepository.get_by_id(db, school_id)
    if not school:
        raise NotFoundError(f"No school found with id: {school_id}")
    return school


async def list_schools(db: AsyncSession, page: PageParams) -> tuple[list[School], Pagination]:
    """Get a page of schools, newest first. An empty page is not an error."""
    schools, total = await SchoolRepository.get_page(db, skip=page.offset, limit=page.limit)
    return schools, page.to_pagination(total)


async def update_school(db: AsyncSession, school_id: str | None, data: SchoolUpdate) -> School:
    """
    Update whitelisted school fields.

    Raises:
        ValidationError: If no id or no updatable field is given
        NotFoundError: If the school does not exist
        ConflictError: If the new name or email belongs to another school
    """
    if not school_id:
        raise ValidationError("School ID is required to update a record.")

    changes = data.model_dump(exclude_unset=True)
    # Required columns cannot be cleared
    for field in ("name", "address", "phone", "email", "established_year"):
        if field in changes and changes[field] is None:
            del changes[field]
    if not changes:
        raise ValidationError("No valid fields provided for update.")

    school = await SchoolRepository.get_by_id(db, school_id)
    if not school:
        raise NotFoundError(SCHOOL_NOT_FOUND_MESSAGE)

    if "name" in changes or "email" in changes:
        conflict = await SchoolRepository.find_conflicting(
            db,
            name=changes.get("name"),
            email=changes.get("email"),
            exclude_id=school.id,
        )
        if conflict:
            raise ConflictError(DUPLICATE_SCHOOL_MESSAGE)

    try:
        return await SchoolRepository.update(db, school, changes)
    except DuplicateRecordError as e:
        raise ConflictError(DUPLICATE_SCHOOL_MESSAGE) from e


async def delete_school(db: AsyncSession, school_id: str | None) -> School:
    """
    Delete a school and return the removed record.

    Raises:
        ValidationError: If no id is given
        NotFoundError: If the school does not exist
    """
    if not school_id:
        raise ValidationError("School ID is required to delete a record.")

    school = await SchoolRepository.get_by_id(db, school_id)
    if not school:
        raise NotFoundError(SCHOOL_NOT_FOUND_MESSAGE)

    await SchoolRepository.delete(db, school)
    return school
