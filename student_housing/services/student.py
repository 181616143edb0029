"""
Student registration service.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from student_housing.models.student import Student
from student_housing.repositories.student import StudentRepository
from student_housing.schemas.student import StudentCreate
from student_housing.utils.exceptions import DuplicateResourceError, StorageUnavailableError
import logging

logger = logging.getLogger(__name__)


class StudentService:
    """Handles the accommodation registration form."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.student_repo = StudentRepository(db_session)

    async def register_student(self, student_data: StudentCreate) -> Student:
        """
        Register a student.

        Args:
            student_data: Validated registration form

        Returns:
            Created student

        Raises:
            DuplicateResourceError: If the email is already registered
            StorageUnavailableError: If the store cannot be written
        """
        email = str(student_data.email)

        try:
            if await self.student_repo.get_by_email(email):
                raise DuplicateResourceError("Student", email.lower())

            return await self.student_repo.create_student(student_data.model_dump())
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateResourceError("Student", email.lower())
        except SQLAlchemyError as e:
            logger.error(f"Failed to register student {email}: {e}")
            raise StorageUnavailableError()
