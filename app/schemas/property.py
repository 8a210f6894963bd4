"""
Pydantic schemas for property requests and responses.
Handles property create/replace payloads, listing filters, pagination metadata and statistics.

These models are the single definition of the API contract: FastAPI enforces them at the
boundary and renders them into the OpenAPI document, and the client package reuses them.
"""

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Dict, Optional, List
from datetime import datetime
from app.config import settings
from app.models.property import PropertyStatus
from app.schemas.base import CamelModel
from app.utils.pagination import max_page


class AmountSchema(CamelModel):
    """Price in minor currency units together with its currency."""

    price: int = Field(
        ...,
        ge=0,
        description="Price in minor currency units (e.g. cents)",
        examples=[250000]
    )

    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        pattern=r"^[A-Za-z]{3}$",
        description="ISO 4217 currency code",
        examples=["EGP"]
    )

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v):
        """Store currency codes upper-cased."""
        return v.upper()


class PropertyPayload(CamelModel):
    """
    Body shared by create and replace operations.

    An omitted status means "available" on create and "unchanged" on replace.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Property listing title",
        examples=["Sunny 2BR Apartment"]
    )

    amount: AmountSchema = Field(
        ...,
        description="Listing price"
    )

    location: str = Field(
        ...,
        min_length=5,
        max_length=255,
        description="Property location/address",
        examples=["New Cairo, Cairo"]
    )

    bedrooms: int = Field(
        ...,
        ge=1,
        description="Number of bedrooms",
        examples=[2]
    )

    bathrooms: int = Field(
        ...,
        ge=1,
        description="Number of bathrooms",
        examples=[1]
    )

    status: Optional[PropertyStatus] = Field(
        None,
        description="Listing status - available or sold",
        examples=["available"]
    )

    def to_record(self, default_status: Optional[PropertyStatus] = PropertyStatus.AVAILABLE) -> dict:
        """
        Flatten the payload into model column values.

        Args:
            default_status: Status used when none was supplied; None leaves it out

        Returns:
            Dictionary of Property column values
        """
        record = {
            "title": self.title,
            "price": self.amount.price,
            "currency": self.amount.currency,
            "location": self.location,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
        }
        status = self.status or default_status
        if status is not None:
            record["status"] = status
        return record


class PropertyCreate(PropertyPayload):
    """Schema for creating a new property."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Sunny 2BR Apartment",
                "amount": {"price": 250000, "currency": "EGP"},
                "location": "New Cairo, Cairo",
                "bedrooms": 2,
                "bathrooms": 1,
                "status": "available"
            }
        }
    )


class PropertyUpdate(PropertyPayload):
    """Schema for replacing an existing property."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Sunny 2BR Apartment",
                "amount": {"price": 240000, "currency": "EGP"},
                "location": "New Cairo, Cairo",
                "bedrooms": 2,
                "bathrooms": 1,
                "status": "sold"
            }
        }
    )


class PropertyResponse(CamelModel):
    """Schema for a stored property."""

    id: str = Field(
        ...,
        description="Property unique identifier",
        examples=["65f1c2a9e4b0a1b2c3d4e5f6"]
    )
    title: str
    amount: AmountSchema
    location: str
    bedrooms: int
    bathrooms: int
    status: PropertyStatus
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class PropertyFilters(CamelModel):
    """Query parameters for the property listing."""

    page: int = Field(
        1,
        ge=1,
        le=max_page(settings.max_page_size),
        description="Page number (starts from 1)"
    )

    take: int = Field(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Number of properties per page (max {settings.max_page_size})"
    )

    search: Optional[str] = Field(
        None,
        min_length=settings.search_min_length,
        max_length=settings.search_max_length,
        description="Case-insensitive substring matched against title or location"
    )

    @field_validator('search', mode='before')
    @classmethod
    def blank_search_is_absent(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class PaginationMeta(CamelModel):
    """Pagination metadata, derived per query."""

    total_items: int = Field(..., description="Size of the filtered set", examples=[42])
    item_count: int = Field(..., description="Items on this page", examples=[10])
    items_per_page: int = Field(..., examples=[10])
    total_pages: int = Field(..., examples=[5])
    current_page: int = Field(..., examples=[1])


class StatusCount(CamelModel):
    """Number of properties per status."""

    available: int = 0
    sold: int = 0


class LocationStats(CamelModel):
    """Averages for one literal location value."""

    location: str
    average_bedrooms: float
    average_bathrooms: float
    count: int


class PropertyStatistics(CamelModel):
    """Aggregate statistics over the whole collection."""

    total_properties: int = Field(..., examples=[12])
    average_price: Dict[str, float] = Field(
        default_factory=dict,
        description="Average price in minor units, per currency code",
        examples=[{"EGP": 250000.0, "SAR": 180000.0}]
    )
    status_count: StatusCount = Field(default_factory=StatusCount)
    location_stats: List[LocationStats] = Field(default_factory=list)
