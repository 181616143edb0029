"""
Database models for the Student Housing API.
Includes Property, PropertyImage and Student models.
"""

from student_housing.models.property import Property, PropertyType
from student_housing.models.image import PropertyImage
from student_housing.models.student import Student, ContactMethod

# Export all models for easy importing
__all__ = [
    "Property",
    "PropertyType",
    "PropertyImage",
    "Student",
    "ContactMethod",
]
