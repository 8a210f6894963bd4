"""
Tests for repository classes.
Tests CRUD operations, search, pagination ordering and aggregates.
"""

import pytest
from datetime import datetime, timezone

from app.models.property import Property, PropertyStatus
from app.repositories.property import PropertyRepository
from app.utils.object_id import generate_object_id, is_valid_object_id
from tests.conftest import PropertyFactory, assert_property_equal


class TestBaseRepository:
    """Test base repository functionality through PropertyRepository."""

    @pytest.mark.asyncio
    async def test_create(self, property_repository: PropertyRepository):
        """Test creating a record assigns id and timestamps."""
        prop = await PropertyFactory.create_property(property_repository, title="Created Property")

        assert is_valid_object_id(prop.id)
        assert prop.title == "Created Property"
        assert prop.status == PropertyStatus.AVAILABLE
        assert prop.created_at is not None
        assert prop.updated_at is not None

    @pytest.mark.asyncio
    async def test_get_by_id(self, property_repository: PropertyRepository, test_property: Property):
        """Test getting a record by ID."""
        retrieved = await property_repository.get_by_id(test_property.id)

        assert retrieved is not None
        assert_property_equal(retrieved, test_property)

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, property_repository: PropertyRepository):
        """Test getting a non-existent record."""
        assert await property_repository.get_by_id(generate_object_id()) is None

    @pytest.mark.asyncio
    async def test_replace(self, property_repository: PropertyRepository, test_property: Property):
        """Test replacing record fields."""
        updated = await property_repository.replace(
            test_property.id,
            {"title": "Replaced Title", "price": 1, "status": PropertyStatus.SOLD}
        )

        assert updated is not None
        assert updated.id == test_property.id
        assert updated.title == "Replaced Title"
        assert updated.price == 1
        assert updated.status == PropertyStatus.SOLD
        assert updated.location == "New Cairo, Cairo"

    @pytest.mark.asyncio
    async def test_replace_not_found(self, property_repository: PropertyRepository):
        """Test replacing a non-existent record."""
        assert await property_repository.replace(generate_object_id(), {"title": "Nope"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, property_repository: PropertyRepository, test_property: Property):
        """Test deleting a record."""
        assert await property_repository.delete(test_property.id) is True
        assert await property_repository.get_by_id(test_property.id) is None

    @pytest.mark.asyncio
    async def test_delete_not_found(self, property_repository: PropertyRepository):
        """Test deleting a non-existent record."""
        assert await property_repository.delete(generate_object_id()) is False

    @pytest.mark.asyncio
    async def test_count(self, property_repository: PropertyRepository):
        """Test counting records."""
        assert await property_repository.count() == 0

        for i in range(3):
            await PropertyFactory.create_property(property_repository, title=f"Property {i}")

        assert await property_repository.count() == 3


class TestPropertySearch:
    """Test listing search and pagination."""

    @pytest.mark.asyncio
    async def test_newest_first(self, property_repository: PropertyRepository):
        """Listing is ordered by creation time, newest first."""
        created = []
        for i in range(3):
            created.append(await PropertyFactory.create_property(property_repository, title=f"Property {i}"))

        properties, total = await property_repository.search_properties()

        assert total == 3
        assert [p.id for p in properties] == [p.id for p in reversed(created)]

    @pytest.mark.asyncio
    async def test_same_created_at_ordered_by_id_desc(self, property_repository: PropertyRepository):
        """Rows created in the same instant come back in descending id order."""
        created_at = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        ids = ["65e1c2a9e4b0a1b2c3d4e5f1", "65e1c2a9e4b0a1b2c3d4e5f3", "65e1c2a9e4b0a1b2c3d4e5f2"]
        for property_id in ids:
            await property_repository.create({
                **PropertyFactory.create_property_data(title=f"Tied {property_id[-1]}"),
                "id": property_id,
                "created_at": created_at,
            })

        properties, total = await property_repository.search_properties()

        assert total == 3
        assert [p.id for p in properties] == sorted(ids, reverse=True)

    @pytest.mark.asyncio
    async def test_skip_and_limit(self, property_repository: PropertyRepository):
        """Pages do not overlap and the total is the full filtered size."""
        for i in range(5):
            await PropertyFactory.create_property(property_repository, title=f"Property {i}")

        first, total = await property_repository.search_properties(skip=0, limit=2)
        second, _ = await property_repository.search_properties(skip=2, limit=2)
        last, _ = await property_repository.search_properties(skip=4, limit=2)

        assert total == 5
        assert len(first) == 2
        assert len(second) == 2
        assert len(last) == 1
        ids = [p.id for p in first + second + last]
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_search_matches_title_or_location(self, property_repository: PropertyRepository):
        """Search is a case-insensitive substring match on title or location."""
        await PropertyFactory.create_property(property_repository, title="Cairo Loft", location="Downtown")
        await PropertyFactory.create_property(property_repository, title="Villa", location="New CAIRO")
        await PropertyFactory.create_property(property_repository, title="Beach House", location="Alexandria")

        properties, total = await property_repository.search_properties(search="cairo")

        assert total == 2
        assert {p.title for p in properties} == {"Cairo Loft", "Villa"}

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, property_repository: PropertyRepository):
        """LIKE wildcards in the search term match only themselves."""
        await PropertyFactory.create_property(property_repository, title="100% Sunny")
        await PropertyFactory.create_property(property_repository, title="Shady Place")

        properties, total = await property_repository.search_properties(search="0% S")
        assert total == 1
        assert properties[0].title == "100% Sunny"

        _, total = await property_repository.search_properties(search="%%%")
        assert total == 0

    @pytest.mark.asyncio
    async def test_search_no_match(self, property_repository: PropertyRepository, test_property: Property):
        """A search without matches returns an empty page and zero total."""
        properties, total = await property_repository.search_properties(search="zzz")

        assert properties == []
        assert total == 0


class TestPropertyStatistics:
    """Test collection aggregates."""

    @pytest.mark.asyncio
    async def test_empty_collection(self, property_repository: PropertyRepository):
        """An empty collection yields zeros and empty aggregates."""
        stats = await property_repository.get_property_statistics()

        assert stats["total_properties"] == 0
        assert stats["average_price"] == {}
        assert stats["status_count"] == {"available": 0, "sold": 0}
        assert stats["location_stats"] == []

    @pytest.mark.asyncio
    async def test_average_price_per_currency(self, property_repository: PropertyRepository):
        """Each currency is averaged on its own."""
        await PropertyFactory.create_property(property_repository, price=100, currency="USD")
        await PropertyFactory.create_property(property_repository, price=300, currency="USD")
        await PropertyFactory.create_property(property_repository, price=1000, currency="EGP")

        stats = await property_repository.get_property_statistics()

        assert stats["total_properties"] == 3
        assert stats["average_price"] == {"EGP": 1000.0, "USD": 200.0}

    @pytest.mark.asyncio
    async def test_status_count(self, property_repository: PropertyRepository):
        """Statuses are counted, missing ones default to zero."""
        await PropertyFactory.create_property(property_repository, status=PropertyStatus.SOLD)
        await PropertyFactory.create_property(property_repository, status=PropertyStatus.SOLD)

        stats = await property_repository.get_property_statistics()

        assert stats["status_count"] == {"available": 0, "sold": 2}

    @pytest.mark.asyncio
    async def test_location_grouping_is_literal(self, property_repository: PropertyRepository):
        """Locations differing only by case are separate groups."""
        await PropertyFactory.create_property(property_repository, location="Giza City", bedrooms=2, bathrooms=1)
        await PropertyFactory.create_property(property_repository, location="Giza City", bedrooms=3, bathrooms=2)
        await PropertyFactory.create_property(property_repository, location="giza city", bedrooms=5, bathrooms=5)

        stats = await property_repository.get_property_statistics()
        by_location = {entry["location"]: entry for entry in stats["location_stats"]}

        assert set(by_location) == {"Giza City", "giza city"}
        assert by_location["Giza City"]["average_bedrooms"] == 2.5
        assert by_location["Giza City"]["average_bathrooms"] == 1.5
        assert by_location["Giza City"]["count"] == 2
        assert by_location["giza city"]["count"] == 1
