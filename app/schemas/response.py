"""
Uniform response envelope wrapping every API payload.
"""

from pydantic import Field
from typing import Generic, Literal, Optional, TypeVar
from app.schemas.base import CamelModel
from app.schemas.property import PaginationMeta

DataT = TypeVar("DataT")


def envelope_status(status_code: int) -> str:
    """Envelope status is "success" below 400, "fail" otherwise."""
    return "success" if status_code < 400 else "fail"


class ApiResponse(CamelModel, Generic[DataT]):
    """Envelope: {status, message, statusCode, data?, meta?}."""

    status: Literal["success", "fail"] = Field(..., examples=["success"])
    message: str = Field(..., examples=["Properties fetched successfully"])
    status_code: int = Field(..., examples=[200])
    data: Optional[DataT] = None
    meta: Optional[PaginationMeta] = Field(
        None,
        description="Present only on paginated listing responses"
    )

    @classmethod
    def build(
        cls,
        status_code: int,
        message: str,
        data: Optional[DataT] = None,
        meta: Optional[PaginationMeta] = None
    ) -> "ApiResponse[DataT]":
        return cls(
            status=envelope_status(status_code),
            message=message,
            status_code=status_code,
            data=data,
            meta=meta
        )
