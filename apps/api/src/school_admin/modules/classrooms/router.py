"""
Classrooms Router

Endpoints (admin and superadmin, rate limited per client address):
- POST /classroom - Create a classroom
- GET /classroom - List classrooms, filtered by ?id= and/or ?schoolId=
- PUT /classroom?id= - Update a classroom
- DELETE /classroom?id= - Delete a classroom
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.auth import AccessGuard
from school_admin.core.database import get_db
from school_admin.core.errors import InternalServiceError, ServiceError
from school_admin.core.pagination import PageParams, page_params
from school_admin.core.rate_limit import RateLimiter
from school_admin.core.schemas import ApiResponse
from school_admin.modules.classrooms import service
from school_admin.modules.classrooms.schemas import (
    ClassroomCreate,
    ClassroomResponse,
    ClassroomUpdate,
)
from school_admin.modules.users.models import UserRole

logger = logging.getLogger(__name__)


def create_router() -> APIRouter:
    """Build the /classroom router."""
    classroom_rate_limit = RateLimiter("classroom")
    require_admin = AccessGuard([UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value])
    router = APIRouter(dependencies=[Depends(classroom_rate_limit), Depends(require_admin)])

    @router.post(
        "",
        response_model=ApiResponse[ClassroomResponse],
        status_code=status.HTTP_201_CREATED,
        summary="Create Classroom",
    )
    async def create_classroom(
        data: ClassroomCreate,
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[ClassroomResponse]:
        """
        Create a classroom in an existing school.

        Raises:
            400: Missing or invalid fields
            404: School does not exist
            409: Classroom name already used in this school
        """
        try:
            classroom = await service.create_classroom(db, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error creating classroom: {e}")
            raise InternalServiceError("Error creating classroom.") from e

        return ApiResponse(
            message="Classroom created successfully.",
            data=ClassroomResponse.model_validate(classroom),
        )

    @router.get(
        "",
        response_model=ApiResponse[list[ClassroomResponse]],
        summary="List Classrooms",
    )
    async def list_classrooms(
        id: str | None = Query(None, description="Filter by classroom id"),
        school_id: str | None = Query(None, alias="schoolId", description="Filter by school id"),
        page: PageParams = Depends(page_params),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[list[ClassroomResponse]]:
        try:
            classrooms, pagination = await service.list_classrooms(
                db, page, classroom_id=id, school_id=school_id
            )
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error retrieving classrooms: {e}")
            raise InternalServiceError("Error retrieving classroom(s).") from e

        return ApiResponse(
            message="Classroom(s) found.",
            data=[ClassroomResponse.model_validate(classroom) for classroom in classrooms],
            pagination=pagination,
        )

    @router.put(
        "",
        response_model=ApiResponse[ClassroomResponse],
        summary="Update Classroom",
    )
    async def update_classroom(
        data: ClassroomUpdate,
        id: str | None = Query(None, description="Classroom id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[ClassroomResponse]:
        try:
            classroom = await service.update_classroom(db, id, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error updating classroom {id}: {e}")
            raise InternalServiceError("Error updating classroom.") from e

        return ApiResponse(
            message="Classroom updated successfully.",
            data=ClassroomResponse.model_validate(classroom),
        )

    @router.delete(
        "",
        response_model=ApiResponse[ClassroomResponse],
        summary="Delete Classroom",
    )
    async def delete_classroom(
        id: str | None = Query(None, description="Classroom id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[ClassroomResponse]:
        try:
            classroom = await service.delete_classroom(db, id)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error deleting classroom {id}: {e}")
            raise InternalServiceError("Error deleting classroom.") from e

        return ApiResponse(
            message="Classroom deleted successfully.",
            data=ClassroomResponse.model_validate(classroom),
        )

    return router
