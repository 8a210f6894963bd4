"""
Property model for listings.
Handles property data with location, pricing in minor currency units, and sale status.
"""

from sqlalchemy import String, Integer, BigInteger, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
import enum
from typing import Any, Dict


class PropertyStatus(str, enum.Enum):
    """Property listing status."""
    AVAILABLE = "available"
    SOLD = "sold"


class Property(Base):
    """
    Property listing.
    The amount is stored as two columns and exposed as a nested object.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    # Pricing information, price in minor units (cents)
    price: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Price in minor currency units"
    )

    currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="ISO 4217 currency code"
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property location/address"
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of bedrooms"
    )

    bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of bathrooms"
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(
            PropertyStatus,
            name="property_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        nullable=False,
        default=PropertyStatus.AVAILABLE,
        index=True,
        comment="Listing status - available or sold"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price} {self.currency})>"

    @property
    def amount(self) -> Dict[str, Any]:
        return {"price": self.price, "currency": self.currency}

    def to_dict(self) -> dict:
        """
        Convert property to its wire representation.

        Returns:
            Dictionary with camelCase keys and a nested amount object
        """
        return {
            "id": self.id,
            "title": self.title,
            "amount": self.amount,
            "location": self.location,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


# Listing is ordered newest first
created_at_index = Index(
    'idx_properties_created_at_desc',
    Property.created_at.desc(),
    Property.id.desc()
)
