"""
Error response rendering for the API.

Every failure, whether raised by a service, by request validation, by the
router or by the database, leaves the API in one JSON envelope:

    {"error": {"code", "message", "timestamp", "request_id", "details"?}}

Services translate the errors they expect (bad filters, missing listings,
duplicate registrations, unreachable storage) into APIException subclasses.
Anything that escapes them is classified here and never exposes driver or
traceback text to the client.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from student_housing.utils.exceptions import APIException, InternalServerError, StorageUnavailableError
import logging
import uuid

logger = logging.getLogger(__name__)

# Database errors that mean the store itself could not be reached
CONNECTIVITY_ERRORS = (OperationalError, InterfaceError)

JSON_SCALARS = (str, int, float, bool, list, dict)


class ErrorHandlerService:
    """Builds error envelopes and logs each failure under a short request id."""

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        Args:
            error_code: Machine readable code, e.g. INVALID_FILTER
            message: Human readable message
            details: Optional per-field errors
            request_id: Optional id echoed in the server log

        Returns:
            Envelope dictionary
        """
        body: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": ErrorHandlerService._get_current_timestamp(),
        }
        if details:
            body["details"] = details
        if request_id:
            body["request_id"] = request_id
        return {"error": body}

    @staticmethod
    def _respond(
        status_code: int,
        error_code: str,
        message: str,
        request: Optional[Request] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
        cause: Optional[BaseException] = None
    ) -> JSONResponse:
        request_id = ErrorHandlerService._generate_request_id()

        # Client mistakes are warnings; server and storage failures are errors
        log = logger.error if status_code >= 500 else logger.warning
        log(
            f"[{request_id}] {status_code} {error_code}: {cause if cause is not None else message}",
            extra={
                "error_code": error_code,
                "status_code": status_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
            },
            exc_info=cause if status_code >= 500 else None
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(error_code, message, details, request_id),
            headers=headers
        )

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        """Render an APIException raised by a service or router."""
        return ErrorHandlerService._respond(
            exception.status_code,
            exception.error_code or "API_ERROR",
            exception.detail,
            request,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Union[RequestValidationError, PydanticValidationError],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Render request body or model validation failures with one detail entry per field."""
        details = [
            {
                "field": " -> ".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": ErrorHandlerService._safe_input(error.get("input")),
            }
            for error in exception.errors()
        ]
        return ErrorHandlerService._respond(
            422, "VALIDATION_ERROR", "Request validation failed", request, details=details
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """
        Render a database error that escaped the service layer.

        Connectivity failures become STORAGE_UNAVAILABLE (503); any other
        database error is an internal error (500).
        """
        if isinstance(exception, CONNECTIVITY_ERRORS):
            api_error: APIException = StorageUnavailableError()
        else:
            api_error = InternalServerError("Database operation failed")

        return ErrorHandlerService._respond(
            api_error.status_code, api_error.error_code, api_error.detail, request, cause=exception
        )

    @staticmethod
    def handle_http_exception(exception: HTTPException, request: Optional[Request] = None) -> JSONResponse:
        """Render plain HTTP exceptions, including routing 404s and 405s."""
        error_code = "NOT_FOUND" if exception.status_code == 404 else f"HTTP_{exception.status_code}"
        return ErrorHandlerService._respond(
            exception.status_code,
            error_code,
            str(exception.detail),
            request,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        """Render any other exception as a generic internal error."""
        api_error = InternalServerError()
        return ErrorHandlerService._respond(
            api_error.status_code, api_error.error_code, api_error.detail, request, cause=exception
        )

    @staticmethod
    def _generate_request_id() -> str:
        return uuid.uuid4().hex[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        """Current UTC time as ISO 8601 with a Z suffix."""
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

    @staticmethod
    def _safe_input(value: Any) -> Any:
        if value is None or isinstance(value, JSON_SCALARS):
            return value
        return str(value)
