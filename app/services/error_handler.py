"""
Error handling service for consistent error response formatting and logging.
The only place where exceptions become HTTP responses.
"""

from typing import Dict, Any, Optional, List, Sequence
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Full detail is logged server-side; responses carry only the public message.
    """

    @staticmethod
    def format_error_response(
        status_code: int,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in the response envelope.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            errors: Optional list of per-field error details
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        response: Dict[str, Any] = {
            "status": "fail",
            "message": message,
            "statusCode": status_code,
        }

        if errors:
            response["errors"] = errors

        if request_id:
            response["requestId"] = request_id

        return response

    @staticmethod
    def format_validation_errors(raw_errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Convert pydantic error dictionaries into error details.

        The leading location segment ("body", "query", "path") is dropped.
        """
        details = []
        for error in raw_errors:
            location = [str(loc) for loc in error.get("loc", ())]
            if location and location[0] in ("body", "query", "path"):
                location = location[1:]
            details.append({
                "field": " -> ".join(location) or None,
                "message": error["msg"],
                "type": error["type"],
            })
        return details

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            status_code=exception.status_code,
            message=exception.detail,
            errors=getattr(exception, "field_errors", None),
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Any,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request and pydantic validation errors.

        The message enumerates every violated constraint.

        Args:
            exception: RequestValidationError or pydantic ValidationError
            request: Optional FastAPI request object

        Returns:
            400 JSON response with validation error details
        """
        request_id = ErrorHandlerService._request_id(request)
        details = ErrorHandlerService.format_validation_errors(exception.errors())

        logger.warning(
            f"Validation Error [{request_id}]: {len(details)} field errors",
            extra={
                "error_count": len(details),
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": details
            }
        )

        summary = "; ".join(
            f"{detail['field']}: {detail['message']}" if detail["field"] else detail["message"]
            for detail in details
        )
        error_response = ErrorHandlerService.format_error_response(
            status_code=400,
            message=f"Validation failed: {summary}" if summary else "Validation failed",
            errors=details,
            request_id=request_id
        )

        return JSONResponse(status_code=400, content=error_response)

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors that escaped the service layer.

        Args:
            exception: SQLAlchemy error
            request: Optional FastAPI request object

        Returns:
            500 JSON response with a generic message
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.error(
            f"Database Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        error_response = ErrorHandlerService.format_error_response(
            status_code=500,
            message="Database operation failed",
            request_id=request_id
        )

        return JSONResponse(status_code=500, content=error_response)

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions (unknown routes, wrong methods).

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            status_code=exception.status_code,
            message=str(exception.detail),
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors with secure error responses.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            JSON response with generic error message
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        error_response = ErrorHandlerService.format_error_response(
            status_code=500,
            message=GENERIC_ERROR_MESSAGE,
            request_id=request_id
        )

        return JSONResponse(status_code=500, content=error_response)

    @staticmethod
    def _request_id(request: Optional[Request]) -> str:
        """Reuse the middleware request ID, or generate one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]
