"""
Users module - Account registration and management.
"""

from school_admin.modules.users.models import User, UserRole
from school_admin.modules.users.repository import UserRepository
from school_admin.modules.users.router import create_router

__all__ = ["User", "UserRole", "UserRepository", "create_router"]
