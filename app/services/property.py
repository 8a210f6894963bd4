"""
Property service for managing property listings.
Handles listing with search and pagination, create/replace/delete, and collection statistics.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from app.repositories.property import PropertyRepository
from app.models.property import Property
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyFilters,
    PaginationMeta,
    PropertyStatistics
)
from app.utils.exceptions import PersistenceError, PropertyNotFoundError
from app.utils.pagination import build_pagination_meta, page_to_skip
import logging

logger = logging.getLogger(__name__)

STATISTICS_PRECISION = 2


class PropertyService:
    """
    Property service for managing property listings.

    Every failure coming from the persistence layer is caught here and re-raised as a
    PersistenceError with a public message; the cause is only logged.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a new property listing.

        Args:
            property_data: Validated property payload

        Returns:
            Created property instance

        Raises:
            PersistenceError: If the store rejects the write
        """
        try:
            property_obj = await self.property_repo.create(property_data.to_record())
        except SQLAlchemyError:
            logger.error("Failed to create property", exc_info=True)
            raise PersistenceError("Failed to create property")

        logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def list_properties(self, filters: PropertyFilters) -> Tuple[List[Property], PaginationMeta]:
        """
        Get one page of properties matching the filters.

        Args:
            filters: Validated page, take and search parameters

        Returns:
            Tuple of (properties on the page, pagination metadata)

        Raises:
            PersistenceError: If the store cannot be read
        """
        try:
            properties, total_count = await self.property_repo.search_properties(
                search=filters.search,
                skip=page_to_skip(filters.page, filters.take),
                limit=filters.take
            )
        except SQLAlchemyError:
            logger.error("Failed to fetch properties", exc_info=True)
            raise PersistenceError("Failed to fetch properties", write=False)

        meta = PaginationMeta.model_validate(
            build_pagination_meta(total_count, len(properties), filters.page, filters.take)
        )
        logger.info(
            f"Fetched {meta.item_count} properties (page {meta.current_page} of {meta.total_pages})"
        )
        return properties, meta

    async def update_property(self, property_id: str, property_data: PropertyUpdate) -> Property:
        """
        Replace the fields of an existing property.

        An omitted status keeps the stored status.

        Args:
            property_id: Identifier of the property
            property_data: Validated property payload

        Returns:
            Updated property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
            PersistenceError: If the store rejects the write
        """
        try:
            updated_property = await self.property_repo.replace(
                property_id, property_data.to_record(default_status=None)
            )
        except SQLAlchemyError:
            logger.error(f"Failed to update property {property_id}", exc_info=True)
            raise PersistenceError("Failed to update property")

        if updated_property is None:
            logger.warning(f"Property with id {property_id} not found for update.")
            raise PropertyNotFoundError(property_id)

        logger.info(f"Property with id {property_id} updated successfully")
        return updated_property

    async def delete_property(self, property_id: str) -> None:
        """
        Permanently delete a property.

        Args:
            property_id: Identifier of the property

        Raises:
            PropertyNotFoundError: If property doesn't exist
            PersistenceError: If the store rejects the delete
        """
        try:
            deleted = await self.property_repo.delete(property_id)
        except SQLAlchemyError:
            logger.error(f"Failed to delete property {property_id}", exc_info=True)
            raise PersistenceError("Failed to delete property")

        if not deleted:
            logger.warning(f"Property with id {property_id} not found for deletion.")
            raise PropertyNotFoundError(property_id)

        logger.info(f"Property with id {property_id} deleted successfully")

    async def get_property_statistics(self) -> PropertyStatistics:
        """
        Compute collection-wide statistics.

        An empty collection yields zero counts and empty averages.

        Raises:
            PersistenceError: If the store cannot be read
        """
        try:
            raw = await self.property_repo.get_property_statistics()
        except SQLAlchemyError:
            logger.error("Failed to compute property statistics", exc_info=True)
            raise PersistenceError("Failed to fetch property statistics", write=False)

        return PropertyStatistics(
            total_properties=raw["total_properties"],
            average_price={
                currency: round(average, STATISTICS_PRECISION)
                for currency, average in raw["average_price"].items()
            },
            status_count=raw["status_count"],
            location_stats=[
                {
                    "location": entry["location"],
                    "average_bedrooms": round(entry["average_bedrooms"], STATISTICS_PRECISION),
                    "average_bathrooms": round(entry["average_bathrooms"], STATISTICS_PRECISION),
                    "count": entry["count"],
                }
                for entry in raw["location_stats"]
            ]
        )
