"""
Property repository for listing queries and collection-wide aggregates.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func, desc
from app.repositories.base import BaseRepository
from app.models.property import Property, PropertyStatus
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the search text is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Listing is offset/limit paginated and ordered newest first, ties broken by id.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    def _search_conditions(self, search: Optional[str]) -> List:
        """
        Build filter conditions for a search term.

        A record matches when the term is a case-insensitive substring of its
        title or of its location.
        """
        if not search:
            return []

        pattern = f"%{_escape_like(search)}%"
        return [
            or_(
                Property.title.ilike(pattern, escape="\\"),
                Property.location.ilike(pattern, escape="\\")
            )
        ]

    async def search_properties(
        self,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Property], int]:
        """
        Fetch one page of properties and the size of the filtered set.

        The page and the count are two separate reads; a concurrent write between
        them is tolerated.

        Args:
            search: Optional search term for title or location
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Tuple of (properties list, total count)
        """
        try:
            conditions = self._search_conditions(search)

            query = (
                select(Property)
                .where(*conditions)
                .order_by(desc(Property.created_at), desc(Property.id))
                .offset(skip)
                .limit(limit)
            )
            count_query = select(func.count(Property.id)).where(*conditions)

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar() or 0

            logger.debug(f"Property search returned {len(properties)} of {total_count} total results")
            return properties, total_count
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    async def get_property_statistics(self) -> Dict[str, Any]:
        """
        Aggregate the whole collection.

        Returns:
            Dictionary with raw aggregates: total count, average price per currency,
            count per status, and per-location bedroom/bathroom averages
        """
        try:
            total_properties = await self.count()

            # Currencies are never blended
            price_query = (
                select(Property.currency, func.avg(Property.price))
                .group_by(Property.currency)
                .order_by(Property.currency)
            )
            price_result = await self.db.execute(price_query)
            average_price = {currency: float(avg) for currency, avg in price_result.all()}

            status_query = (
                select(Property.status, func.count(Property.id))
                .group_by(Property.status)
            )
            status_result = await self.db.execute(status_query)
            status_count = {status.value: 0 for status in PropertyStatus}
            for status, count in status_result.all():
                status_count[PropertyStatus(status).value] = count

            # Grouped on the literal location string
            location_query = (
                select(
                    Property.location,
                    func.avg(Property.bedrooms),
                    func.avg(Property.bathrooms),
                    func.count(Property.id)
                )
                .group_by(Property.location)
                .order_by(Property.location)
            )
            location_result = await self.db.execute(location_query)
            location_stats = [
                {
                    "location": location,
                    "average_bedrooms": float(avg_bedrooms),
                    "average_bathrooms": float(avg_bathrooms),
                    "count": count,
                }
                for location, avg_bedrooms, avg_bathrooms, count in location_result.all()
            ]

            logger.debug("Generated property statistics")
            return {
                "total_properties": total_properties,
                "average_price": average_price,
                "status_count": status_count,
                "location_stats": location_stats,
            }
        except Exception as e:
            logger.error(f"Failed to get property statistics: {e}")
            raise
