"""
Core module - Configuration, database, security, and utilities.
"""

from school_admin.core.auth import AccessGuard, AuthContext
from school_admin.core.config import get_settings, settings
from school_admin.core.database import Base, close_db, get_db, init_db
from school_admin.core.errors import (
    ConflictError,
    ExpiredCredentialError,
    ForbiddenError,
    InternalServiceError,
    InvalidCredentialError,
    MissingRoleError,
    NotFoundError,
    ServiceError,
    UnauthenticatedError,
    ValidationError,
)
from school_admin.core.rate_limit import RateLimiter, RateLimitExceeded
from school_admin.core.redis import close_redis, init_redis
from school_admin.core.security import (
    decode_long_token,
    decode_short_token,
    hash_password,
    issue_long_lived_token,
    issue_short_lived_token,
    verify_password,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "init_redis",
    "close_redis",
    # Security
    "hash_password",
    "verify_password",
    "issue_long_lived_token",
    "issue_short_lived_token",
    "decode_long_token",
    "decode_short_token",
    # Access control
    "AccessGuard",
    "AuthContext",
    "RateLimiter",
    # Errors
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthenticatedError",
    "InvalidCredentialError",
    "ExpiredCredentialError",
    "MissingRoleError",
    "ForbiddenError",
    "InternalServiceError",
    "RateLimitExceeded",
]
