"""
API route handlers for the Student Housing API.
Provides organized routing for different API endpoints.
"""

from .properties import router as properties_router
from .students import router as students_router

__all__ = ["properties_router", "students_router"]
