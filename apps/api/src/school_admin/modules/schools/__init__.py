"""
Schools module - School tenant management.
"""

from school_admin.modules.schools.models import School
from school_admin.modules.schools.repository import SchoolRepository
from school_admin.modules.schools.router import create_router

__all__ = ["School", "SchoolRepository", "create_router"]
