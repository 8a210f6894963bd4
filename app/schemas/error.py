"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import Field
from typing import List, Literal, Optional, Any, Dict
from app.schemas.base import CamelModel


class ErrorDetail(CamelModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field path that caused the error",
        examples=["amount -> price"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be greater than or equal to 0"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["greater_than_equal"]
    )


class ErrorResponse(CamelModel):
    """Envelope returned for every failed request."""

    status: Literal["fail"] = "fail"

    message: str = Field(
        ...,
        description="Public error message",
        examples=["Validation failed: amount -> price: Input should be greater than or equal to 0"]
    )

    status_code: int = Field(..., examples=[400])

    errors: Optional[List[ErrorDetail]] = Field(
        None,
        description="Per-field details for validation failures"
    )

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )


def _example(status_code: int, message: str, **extra: Any) -> Dict[str, Any]:
    body = {"status": "fail", "message": message, "statusCode": status_code, "requestId": "abc12345"}
    body.update(extra)
    return body


COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _example(
                    400,
                    "Validation failed: title: String should have at least 3 characters",
                    errors=[{
                        "field": "title",
                        "message": "String should have at least 3 characters",
                        "type": "string_too_short"
                    }]
                )
            }
        }
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _example(404, "Property not found with ID: 65f1c2a9e4b0a1b2c3d4e5f6")
            }
        }
    },
    422: {
        "description": "Unprocessable Entity - The write was rejected by the store",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _example(422, "Failed to create property")
            }
        }
    },
    429: {
        "description": "Too Many Requests",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _example(429, "Too many requests from this IP, please try again later.")
            }
        }
    },
    500: {
        "description": "Internal Server Error",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": _example(500, "An unexpected error occurred. Please try again later.")
            }
        }
    },
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


def get_read_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for read endpoints."""
    return get_error_responses(400, 429, 500)


def get_write_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for create/update/delete endpoints."""
    return get_error_responses(400, 404, 422, 429, 500)
