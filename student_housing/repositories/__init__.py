"""
Repository layer for data access operations.
"""

from student_housing.repositories.base import BaseRepository
from student_housing.repositories.property import PropertyRepository
from student_housing.repositories.student import StudentRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "StudentRepository"
]
