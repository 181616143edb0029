"""
Service layer for business logic implementation.
Contains services for property search, student registration, flyers and error handling.
"""

from .property import PropertyService
from .student import StudentService
from .flyer import FlyerService
from .error_handler import ErrorHandlerService

__all__ = [
    "PropertyService",
    "StudentService",
    "FlyerService",
    "ErrorHandlerService"
]
