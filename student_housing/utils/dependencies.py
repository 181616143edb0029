"""
FastAPI dependency injection utilities for services.
Each request gets services bound to its own database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from student_housing.database import get_db
from student_housing.services.property import PropertyService
from student_housing.services.student import StudentService


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_student_service(db: AsyncSession = Depends(get_db)) -> StudentService:
    """Get student service instance."""
    return StudentService(db)
