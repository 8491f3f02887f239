"""
Users Router

Endpoints:
- POST /user - Register a new account (public)
- GET /user - List accounts (superadmin, admin)
- PUT /user?id= - Update an account (superadmin)

Login and token refresh live in the auth module under the same prefix.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.auth import AccessGuard, AuthContext
from school_admin.core.database import get_db
from school_admin.core.errors import InternalServiceError, ServiceError
from school_admin.core.pagination import PageParams, page_params
from school_admin.core.schemas import ApiResponse
from school_admin.modules.users import service
from school_admin.modules.users.models import UserRole
from school_admin.modules.users.schemas import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


def create_router() -> APIRouter:
    """Build the /user account router."""
    router = APIRouter()
    require_user_admin = AccessGuard([UserRole.SUPER_ADMIN.value, UserRole.ADMIN.value])
    require_superadmin = AccessGuard([UserRole.SUPER_ADMIN.value])

    @router.post(
        "",
        response_model=ApiResponse[UserResponse],
        status_code=status.HTTP_201_CREATED,
        summary="Register Account",
    )
    async def create_user(
        data: UserCreate,
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[UserResponse]:
        """
        Create a readonly account.

        The response never includes the password or its hash.

        Raises:
            409: Username or email already taken
        """
        try:
            user = await service.create_user(db, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error creating user: {e}")
            raise InternalServiceError("Error creating user.") from e

        return ApiResponse(
            message="User created successfully.",
            data=UserResponse.model_validate(user),
        )

    @router.get(
        "",
        response_model=ApiResponse[list[UserResponse]],
        summary="List Accounts",
    )
    async def list_users(
        id: str | None = Query(None, description="Fetch a single account by id"),
        page: PageParams = Depends(page_params),
        _auth: AuthContext = Depends(require_user_admin),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[list[UserResponse]]:
        try:
            users, pagination = await service.list_users(db, page, user_id=id)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error listing users: {e}")
            raise InternalServiceError("Error retrieving user(s).") from e

        return ApiResponse(
            message="User(s) found.",
            data=[UserResponse.model_validate(user) for user in users],
            pagination=pagination,
        )

    @router.put(
        "",
        response_model=ApiResponse[UserResponse],
        summary="Update Account",
    )
    async def update_user(
        data: UserUpdate,
        id: str | None = Query(None, description="Account id"),
        auth: AuthContext = Depends(require_superadmin),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[UserResponse]:
        try:
            user = await service.update_user(db, id, data)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error updating user {id}: {e}")
            raise InternalServiceError("Error updating user.") from e

        logger.info(f"User {user.id} updated by {auth.subject_id}")
        return ApiResponse(
            message="User updated successfully.",
            data=UserResponse.model_validate(user),
        )

    return router
