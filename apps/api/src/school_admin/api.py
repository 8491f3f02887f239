from fastapi import APIRouter

from school_admin.modules import auth, classrooms, schools, students, users


def create_api_router() -> APIRouter:
    """Compose every resource router under one fresh APIRouter."""
    api_router = APIRouter()

    api_router.include_router(auth.create_router(), prefix="/user", tags=["Authentication"])
    api_router.include_router(users.create_router(), prefix="/user", tags=["Users"])
    api_router.include_router(schools.create_router(), prefix="/school", tags=["Schools"])
    api_router.include_router(
        classrooms.create_router(), prefix="/classroom", tags=["Classrooms"]
    )
    api_router.include_router(students.create_router(), prefix="/student", tags=["Students"])

    return api_router
