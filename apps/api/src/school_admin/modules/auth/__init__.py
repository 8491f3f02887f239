"""Authentication module - Login and short-token refresh."""

from school_admin.modules.auth.router import create_router
from school_admin.modules.auth.schemas import LoginData, LoginRequest, RefreshData, RefreshRequest

__all__ = ["create_router", "LoginData", "LoginRequest", "RefreshData", "RefreshRequest"]
