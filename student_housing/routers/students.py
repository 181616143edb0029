"""
Student registration API endpoints.
"""

from fastapi import APIRouter, Depends, status

from student_housing.services.student import StudentService
from student_housing.schemas.student import StudentCreate, StudentResponse
from student_housing.utils.dependencies import get_student_service
from student_housing.schemas.error import get_error_responses


router = APIRouter(prefix="/students", tags=["Students"])


@router.post(
    "/register",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register student",
    description="Submit the accommodation registration form",
    responses=get_error_responses(409, 422, 500, 503)
)
async def register_student(
    student_data: StudentCreate,
    student_service: StudentService = Depends(get_student_service)
) -> StudentResponse:
    """
    Register a student looking for accommodation.

    Raises:
        DuplicateResourceError: If the email is already registered
    """
    student = await student_service.register_student(student_data)
    return StudentResponse.model_validate(student)
