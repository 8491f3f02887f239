"""
Classrooms module - Classrooms within a school.
"""

from school_admin.modules.classrooms.models import Classroom
from school_admin.modules.classrooms.repository import ClassroomRepository
from school_admin.modules.classrooms.router import create_router

__all__ = ["Classroom", "ClassroomRepository", "create_router"]
