"""
Students Router

Endpoints (admin and superadmin):
- POST /student - Enroll a student
- GET /student - List students, filtered by ?id=, ?schoolId= and/or ?classroomId=
- PUT /student?id= - Update a student (records classroom transfers)
- DELETE /student?id= - Delete a student
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.auth import AccessGuard
from school_admin.core.database import get_db
from school_admin.core.errors import InternalServiceError, ServiceError
from school_admin.core.pagination import PageParams, page_params
from school_admin.core.schemas import ApiResponse
from school_admin.modules.students import service
from school_admin.modules.students.schemas import StudentCreate, StudentResponse, StudentUpdate
from school_admin.modules.users.models import UserRole

logger = logging.getLogger(__name__)


def create_router() -> APIRouter:
    """Build the /student router."""
    require_admin = AccessGuard([UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value])
    router = APIRouter(dependencies=[Depends(require_admin)])

    @router.post(
        "",
        response_model=ApiResponse[StudentResponse],
        status_code=status.HTTP_201_CREATED,
        summary="Create Student",
    )
    async def create_student(
        data: StudentCreate,
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[StudentResponse]:
        """
        Enroll a student in a classroom of a school.

        Raises:
            400: Missing fields, or classroom not in the school
            404: School or classroom does not exist
        """
        try:
            student = await service.create_student(db, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error creating student: {e}")
            raise InternalServiceError("Error creating student.") from e

        return ApiResponse(
            message="Student created successfully.",
            data=StudentResponse.model_validate(student),
        )

    @router.get(
        "",
        response_model=ApiResponse[list[StudentResponse]],
        summary="List Students",
    )
    async def list_students(
        id: str | None = Query(None, description="Filter by student id"),
        school_id: str | None = Query(None, alias="schoolId", description="Filter by school id"),
        classroom_id: str | None = Query(
            None, alias="classroomId", description="Filter by classroom id"
        ),
        page: PageParams = Depends(page_params),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[list[StudentResponse]]:
        try:
            students, pagination = await service.list_students(
                db,
                page,
                student_id=id,
                school_id=school_id,
                classroom_id=classroom_id,
            )
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error retrieving students: {e}")
            raise InternalServiceError("Error retrieving student(s).") from e

        return ApiResponse(
            message="Student(s) found.",
            data=[StudentResponse.model_validate(student) for student in students],
            pagination=pagination,
        )

    @router.put(
        "",
        response_model=ApiResponse[StudentResponse],
        summary="Update Student",
    )
    async def update_student(
        data: StudentUpdate,
        id: str | None = Query(None, description="Student id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[StudentResponse]:
        try:
            student = await service.update_student(db, id, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error updating student {id}: {e}")
            raise InternalServiceError("Error updating student.") from e

        return ApiResponse(
            message="Student updated successfully.",
            data=StudentResponse.model_validate(student),
        )

    @router.delete(
        "",
        response_model=ApiResponse[StudentResponse],
        summary="Delete Student",
    )
    async def delete_student(
        id: str | None = Query(None, description="Student id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[StudentResponse]:
        try:
            student = await service.delete_student(db, id)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error deleting student {id}: {e}")
            raise InternalServiceError("Error deleting student.") from e

        return ApiResponse(
            message="Student deleted successfully.",
            data=StudentResponse.model_validate(student),
        )

    return router
