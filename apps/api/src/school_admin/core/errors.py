"""
Service Errors

Every failure a handler reports to the client is a ``ServiceError``.
Exception handlers in ``core.responses`` render them as the standard
failure envelope using ``status_code`` and ``message``.
"""

from fastapi import status


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.headers = headers
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class NotFoundError(ServiceError):
    """Raised when a target or referenced record does not exist."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class ConflictError(ServiceError):
    """Raised when a write would duplicate a unique field."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=status.HTTP_409_CONFLICT,
        )


class UnauthenticatedError(ServiceError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self, message: str = "No token provided."):
        super().__init__(
            message=message,
            error_code="UNAUTHENTICATED",
            status_code=status.HTTP_403_FORBIDDEN,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialError(ServiceError):
    """Raised for a bad password, signature, or malformed token."""

    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(
            message=message,
            error_code="INVALID_CREDENTIAL",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class ExpiredCredentialError(ServiceError):
    """Raised when a token's expiry has passed."""

    def __init__(self, message: str = "Token expired."):
        super().__init__(
            message=message,
            error_code="EXPIRED_CREDENTIAL",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class MissingRoleError(ServiceError):
    """Raised when the role header is absent."""

    def __init__(self, message: str = "Role header is required."):
        super().__init__(
            message=message,
            error_code="MISSING_ROLE",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class ForbiddenError(ServiceError):
    """Raised when the caller's role is not allowed for the operation."""

    def __init__(self, message: str = "Insufficient role permissions."):
        super().__init__(
            message=message,
            error_code="FORBIDDEN",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class InternalServiceError(ServiceError):
    """Raised for storage or unexpected failures. The message is fixed per operation."""

    def __init__(self, message: str = "An unexpected error occurred."):
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
