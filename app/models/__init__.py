"""
Database models for the Property Listing Service.
"""

from app.models.property import Property, PropertyStatus

__all__ = [
    "Property",
    "PropertyStatus",
]
