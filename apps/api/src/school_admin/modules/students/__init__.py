"""
Students module - Enrollment and classroom transfers.
"""

from school_admin.modules.students.models import Student
from school_admin.modules.students.repository import StudentRepository
from school_admin.modules.students.router import create_router

__all__ = ["Student", "StudentRepository", "create_router"]
