"""
FastAPI dependency injection utilities.
"""

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.services.property import PropertyService
from app.utils.exceptions import ValidationError
from app.utils.object_id import is_valid_object_id


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def valid_property_id(
    id: str = Path(
        ...,
        description="24-character hexadecimal property identifier",
        examples=["65f1c2a9e4b0a1b2c3d4e5f6"]
    )
) -> str:
    """Reject malformed identifiers before they reach the service layer."""
    if not is_valid_object_id(id):
        raise ValidationError(
            "Invalid property id",
            field_errors=[{
                "field": "id",
                "message": "Must be a 24-character hexadecimal identifier",
                "type": "object_id",
            }]
        )
    return id.lower()
