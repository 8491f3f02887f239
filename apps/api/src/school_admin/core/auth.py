"""
Authentication and Authorization Module

Provides the access guard used by protected endpoints. The guard validates
the short-lived JWT from the ``Authorization`` header and checks the caller's
role against the roles allowed for the operation.

SECURITY NOTE:
- By default the role is taken from the client-supplied role header
  (``ROLE_HEADER``, default ``user_role``), matching the existing API clients.
  The header is not signed, so any holder of a valid token can claim any role.
- Set ``TRUST_ROLE_HEADER=false`` to take the role from the verified token
  instead. The header is then ignored.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from school_admin.core.config import settings
from school_admin.core.errors import (
    ExpiredCredentialError,
    ForbiddenError,
    InvalidCredentialError,
    MissingRoleError,
    UnauthenticatedError,
)
from school_admin.core.security import TokenExpiredError, TokenInvalidError, decode_short_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation. Missing tokens are reported by
# the guard itself so the response uses the standard envelope.
security = HTTPBearer(
    auto_error=False,
    description="Short-lived JWT obtained from /user/login or /user/refreshtoken",
)


@dataclass(frozen=True)
class AuthContext:
    """
    Identity attached to an authorized request.

    Attributes:
        subject_id: Account identifier from the token
        subject_key: Account username from the token
        role: Role the request was authorized with
    """

    subject_id: str
    subject_key: str
    role: str

    def __str__(self) -> str:
        return f"AuthContext(subject_id={self.subject_id}, role={self.role})"


class AccessGuard:
    """
    FastAPI dependency gating an operation on a set of roles.

    Usage:
        require_admin = AccessGuard(["admin", "superadmin"])

        @router.get("/classroom")
        async def list_classrooms(auth: AuthContext = Depends(require_admin)):
            ...
    """

    def __init__(self, allowed_roles: Iterable[str]):
        self.allowed_roles = frozenset(str(role) for role in allowed_roles)
        if not self.allowed_roles:
            raise ValueError("AccessGuard requires at least one allowed role")

    def __repr__(self) -> str:
        return f"AccessGuard(allowed_roles={sorted(self.allowed_roles)})"

    async def __call__(
        self,
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
    ) -> AuthContext:
        if credentials is None or not credentials.credentials:
            logger.warning(f"Rejected {request.url.path}: no bearer token")
            raise UnauthenticatedError()

        try:
            payload = decode_short_token(credentials.credentials)
        except TokenExpiredError as e:
            logger.info(f"Rejected {request.url.path}: token expired")
            raise ExpiredCredentialError() from e
        except TokenInvalidError as e:
            logger.warning(f"Rejected {request.url.path}: invalid token ({e})")
            raise InvalidCredentialError() from e

        role = self._resolve_role(request, payload)

        if role not in self.allowed_roles:
            logger.warning(
                f"Access denied: subject {payload['sub']} has role '{role}', "
                f"allowed: {sorted(self.allowed_roles)}"
            )
            raise ForbiddenError()

        context = AuthContext(
            subject_id=str(payload["sub"]),
            subject_key=str(payload.get("key") or ""),
            role=role,
        )
        request.state.auth = context
        logger.debug(f"Authorized {request.url.path} for {context}")
        return context

    @staticmethod
    def _resolve_role(request: Request, payload: dict) -> str:
        if not settings.trust_role_header:
            role = payload.get("role")
            if not role:
                raise InvalidCredentialError()
            return str(role)

        role = request.headers.get(settings.role_header)
        if not role:
            raise MissingRoleError()
        return role


__all__ = [
    "AccessGuard",
    "AuthContext",
    "security",
]
