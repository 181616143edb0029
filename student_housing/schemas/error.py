"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["maxDistance"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["maxDistance requires latitude and longitude"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error",
        examples=["abc"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(
        ...,
        description="Error code identifier",
        examples=["INVALID_FILTER"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid filter 'minPrice': must be an integer"]
    )

    timestamp: str = Field(
        ...,
        description="Error timestamp in ISO format",
        examples=["2024-01-01T00:00:00Z"]
    )

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(
        ...,
        description="Error information"
    )


def _example(code: str, message: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    error = {
        "code": code,
        "message": message,
        "timestamp": "2024-01-01T00:00:00Z",
        "request_id": "abc12345"
    }
    if details:
        error["details"] = details
    return {"error": error}


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid search filter",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "unparseable_number": {
                        "summary": "Unparseable numeric filter",
                        "value": _example("INVALID_FILTER", "Invalid filter 'minPrice': must be an integer")
                    },
                    "distance_without_origin": {
                        "summary": "Radius without reference point",
                        "value": _example(
                            "INVALID_FILTER",
                            "Invalid filter 'maxDistance': maxDistance requires latitude and longitude"
                        )
                    }
                }
            }
        }
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("NOT_FOUND", "Property not found with ID: 42")
            }
        }
    },
    409: {
        "description": "Conflict - Resource already exists",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("CONFLICT", "Student with identifier 'jane@uw.edu' already exists")
            }
        }
    },
    422: {
        "description": "Unprocessable Entity - Request validation failed",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example(
                    "VALIDATION_ERROR",
                    "Request validation failed",
                    [
                        {
                            "field": "body -> price",
                            "message": "Input should be greater than 0",
                            "type": "greater_than",
                            "input": 0
                        }
                    ]
                )
            }
        }
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later.")
            }
        }
    },
    503: {
        "description": "Service Unavailable - Property storage unreachable",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("STORAGE_UNAVAILABLE", "Property storage is unavailable")
            }
        }
    }
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_search_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for search endpoints."""
    return get_error_responses(400, 500, 503)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(404, 409, 422, 500, 503)
