"""
Pydantic schemas for request/response validation.
"""

# Property schemas
from .property import (
    CamelModel,
    PropertyBase,
    PropertyCreate,
    SearchResultResponse,
    UniversityListResponse
)

# Student schemas
from .student import (
    StudentBase,
    StudentCreate,
    StudentResponse
)

# Error schemas
from .error import (
    ErrorDetail,
    ErrorResponse,
    APIErrorResponse
)

__all__ = [
    # Property
    "CamelModel",
    "PropertyBase",
    "PropertyCreate",
    "SearchResultResponse",
    "UniversityListResponse",

    # Student
    "StudentBase",
    "StudentCreate",
    "StudentResponse",

    # Error
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse"
]
