"""
Errors raised by the property search core.
Kept free of HTTP concerns; the service layer maps them onto API exceptions.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for search core errors."""


class InvalidFilter(SearchError, ValueError):
    """Caller-supplied filter is malformed or internally inconsistent."""

    def __init__(self, field: str, message: str, value: Optional[object] = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")


class StorageUnavailable(SearchError):
    """The backing store could not be reached or the query failed in it."""
