"""
Property form model used by client code.

The form works in major currency units (12.34) while the API stores minor
units (1234); conversion between the two is exact.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.property import PropertyStatus
from app.schemas.property import AmountSchema, PropertyPayload, PropertyResponse

MINOR_UNITS_PER_MAJOR = 100
_CENT = Decimal("0.01")


def to_minor_units(price: Union[Decimal, int, str]) -> int:
    """Convert a major-unit price to integer minor units (12.34 -> 1234)."""
    value = Decimal(str(price)) * MINOR_UNITS_PER_MAJOR
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_major_units(price: int) -> Decimal:
    """Convert integer minor units back to a major-unit price (1234 -> 12.34)."""
    return (Decimal(price) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)


class PropertyFormData(BaseModel):
    """Values entered in the create/edit property form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=100)
    price: Decimal = Field(..., ge=_CENT, decimal_places=2, description="Price in major units")
    currency: str = Field(..., min_length=3, max_length=3)
    location: str = Field(..., min_length=5, max_length=255)
    bedrooms: int = Field(..., ge=1)
    bathrooms: int = Field(..., ge=1)
    status: PropertyStatus = PropertyStatus.AVAILABLE

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v):
        v = v.upper()
        if not v.isascii() or not v.isalpha():
            raise ValueError("Currency must contain only letters")
        return v

    @classmethod
    def from_property(cls, prop: PropertyResponse) -> "PropertyFormData":
        """Prefill the form from a stored property."""
        return cls(
            title=prop.title,
            price=to_major_units(prop.amount.price),
            currency=prop.amount.currency,
            location=prop.location,
            bedrooms=prop.bedrooms,
            bathrooms=prop.bathrooms,
            status=prop.status
        )

    def to_payload(self) -> PropertyPayload:
        """Build the request body sent to the API."""
        return PropertyPayload(
            title=self.title,
            amount=AmountSchema(price=to_minor_units(self.price), currency=self.currency),
            location=self.location,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            status=self.status
        )
