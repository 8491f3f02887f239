"""
Authentication Router

Endpoints:
- POST /user/login - Exchange username/email + password for a token pair
- POST /user/refreshtoken - Exchange a long-lived token for a short-lived one

Both endpoints are rate limited per client address.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.database import get_db
from school_admin.core.errors import InternalServiceError, ServiceError
from school_admin.core.rate_limit import RateLimiter
from school_admin.core.schemas import ApiResponse
from school_admin.modules.auth import service
from school_admin.modules.auth.schemas import LoginData, LoginRequest, RefreshData, RefreshRequest

logger = logging.getLogger(__name__)


def device_fingerprint(request: Request) -> str:
    """Opaque device identifier bound into short-lived tokens."""
    return request.headers.get("user-agent") or service.UNKNOWN_DEVICE


def create_router() -> APIRouter:
    """Build the login/refresh router, mounted under /user."""
    router = APIRouter()
    login_rate_limit = RateLimiter("login")
    refresh_rate_limit = RateLimiter("refresh")

    @router.post(
        "/login",
        response_model=ApiResponse[LoginData],
        dependencies=[Depends(login_rate_limit)],
        summary="Login",
    )
    async def login(
        data: LoginRequest,
        device: str = Depends(device_fingerprint),
        db: AsyncSession = Depends(get_db),
    ) -> ApiResponse[LoginData]:
        """
        Authenticate a user and return a long-lived and a short-lived token.

        Raises:
            400: Missing identifier or password
            404: Unknown username/email
            401: Wrong password
            429: Too many attempts
        """
        try:
            tokens = await service.login(db, data, device)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during login: {e}")
            raise InternalServiceError("Error logging in.") from e

        return ApiResponse(message="Login successful.", data=tokens)

    @router.post(
        "/refreshtoken",
        response_model=ApiResponse[RefreshData],
        dependencies=[Depends(refresh_rate_limit)],
        summary="Refresh Short Token",
    )
    async def refresh_token(
        data: RefreshRequest,
        device: str = Depends(device_fingerprint),
    ) -> ApiResponse[RefreshData]:
        try:
            tokens = service.refresh(data, device)
        except ServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error refreshing token: {e}")
            raise InternalServiceError("Error refreshing token.") from e

        return ApiResponse(message="Short token issued successfully.", data=tokens)

    return router
