"""
Student repository for registration records.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from student_housing.repositories.base import BaseRepository
from student_housing.models.student import Student
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class StudentRepository(BaseRepository[Student]):
    """Repository for registered students."""

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def create_student(self, student_data: Dict[str, Any]) -> Student:
        """
        Create a student registration with a normalized email.

        Args:
            student_data: Student column values

        Returns:
            Created student
        """
        data = dict(student_data)
        data["email"] = data["email"].strip().lower()
        student = await self.create(data)
        logger.info(f"Registered student: {student.email} (ID: {student.id})")
        return student

    async def get_by_email(self, email: str) -> Optional[Student]:
        """Get a student by email, case-insensitively."""
        return await self.get_by_field("email", email.strip().lower())
