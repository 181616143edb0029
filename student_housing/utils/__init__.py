"""
Utility modules for the Student Housing API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    ConflictError,
    BadRequestError,
    ServiceUnavailableError,
    InvalidFilterError,
    StorageUnavailableError,
    PropertyNotFoundError,
    DuplicateResourceError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "ServiceUnavailableError",
    "InvalidFilterError",
    "StorageUnavailableError",
    "PropertyNotFoundError",
    "DuplicateResourceError",
]
