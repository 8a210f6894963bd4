"""
Pydantic schemas for request/response validation.
"""

# Property schemas
from .property import (
    AmountSchema,
    PropertyPayload,
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyFilters,
    PaginationMeta,
    StatusCount,
    LocationStats,
    PropertyStatistics
)

# Envelope and error schemas
from .response import ApiResponse, envelope_status
from .error import ErrorDetail, ErrorResponse
from .health import HealthResponse

__all__ = [
    # Property
    "AmountSchema",
    "PropertyPayload",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyFilters",
    "PaginationMeta",
    "StatusCount",
    "LocationStats",
    "PropertyStatistics",

    # Envelope
    "ApiResponse",
    "envelope_status",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
