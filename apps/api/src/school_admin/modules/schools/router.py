"""
Schools Router

Endpoints (superadmin only, rate limited per client address):
- POST /school - Create a school
- GET /school - List schools, or fetch one with ?id=
- PUT /school?id= - Update a school
- DELETE /school?id= - Delete a school
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.auth import AccessGuard, AuthContext
from school_admin.core.database import get_db
from school_admin.core.errors import InternalServiceError, ServiceError
from school_admin.core.pagination import PageParams, page_params
from school_admin.core.rate_limit import RateLimiter
from school_admin.core.schemas import ApiResponse
from school_admin.modules.schools import service
from school_admin.modules.schools.schemas import SchoolCreate, SchoolResponse, SchoolUpdate
from school_admin.modules.users.models import UserRole

logger = logging.getLogger(__name__)


def create_router() -> APIRouter:
    """Build the /school router."""
    school_rate_limit = RateLimiter("school")
    require_superadmin = AccessGuard([UserRole.SUPER_ADMIN.value])
    router = APIRouter(dependencies=[Depends(school_rate_limit), Depends(require_superadmin)])

    @router.post(
        "",
        response_model=ApiResponse[SchoolResponse],
        status_code=status.HTTP_201_CREATED,
        summary="Create School",
    )
    async def create_school(
        data: SchoolCreate,
        auth: AuthContext = Depends(require_superadmin),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[SchoolResponse]:
        """
        Create a school owned by the calling account.

        Raises:
            400: Missing or invalid fields
            409: Name or email already used by another school
        """
        try:
            school = await service.create_school(db, data, created_by=auth.subject_id)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error creating school: {e}")
            raise InternalServiceError("Error creating school.") from e

        return ApiResponse(
            message="School created successfully.",
            data=SchoolResponse.model_validate(school),
        )

    @router.get(
        "",
        response_model=ApiResponse[SchoolResponse | list[SchoolResponse]],
        summary="Get School(s)",
    )
    async def get_schools(
        id: str | None = Query(None, description="Fetch a single school by id"),
        page: PageParams = Depends(page_params),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[SchoolResponse | list[SchoolResponse]]:
        try:
            if id:
                school = await service.get_school(db, id)
                return ApiResponse(
                    message="School retrieved successfully.",
                    data=SchoolResponse.model_validate(school),
                )

            schools, pagination = await service.list_schools(db, page)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error retrieving schools: {e}")
            raise InternalServiceError("Error retrieving schools.") from e

        return ApiResponse(
            message="Schools retrieved successfully.",
            data=[SchoolResponse.model_validate(school) for school in schools],
            pagination=pagination,
        )

    @router.put(
        "",
        response_model=ApiResponse[SchoolResponse],
        summary="Update School",
    )
    async def update_school(
        data: SchoolUpdate,
        id: str | None = Query(None, description="School id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[SchoolResponse]:
        try:
            school = await service.update_school(db, id, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error updating school {id}: {e}")
            raise InternalServiceError("Error updating school.") from e

        return ApiResponse(
            message="School updated successfully.",
            data=SchoolResponse.model_validate(school),
        )

    @router.delete(
        "",
        response_model=ApiResponse[SchoolResponse],
        summary="Delete School",
    )
    async def delete_school(
        id: str | None = Query(None, description="School id"),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[SchoolResponse]:
        try:
            school = await service.delete_school(db, id)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error deleting school {id}: {e}")
            raise InternalServiceError("Error deleting school.") from e

        return ApiResponse(
            message="School deleted successfully.",
            data=SchoolResponse.model_validate(school),
        )

    return router
