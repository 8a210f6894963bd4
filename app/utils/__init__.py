"""
Utility modules for the Property Listing Service.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    BadRequestError,
    PersistenceError,
    PropertyNotFoundError,
    RateLimitExceededError
)
from .object_id import generate_object_id, is_valid_object_id, OBJECT_ID_PATTERN
from .pagination import build_pagination_meta, max_page, page_to_skip

__all__ = [
    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "BadRequestError",
    "PersistenceError",
    "PropertyNotFoundError",
    "RateLimitExceededError",

    # Identifiers
    "generate_object_id",
    "is_valid_object_id",
    "OBJECT_ID_PATTERN",

    # Pagination
    "build_pagination_meta",
    "max_page",
    "page_to_skip",
]
