"""
Test configuration and fixtures for the property listing service.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Configure the application for tests before it is imported
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.database import Base, get_db
from app.models.property import Property, PropertyStatus
from app.repositories.property import PropertyRepository
from app.services.property import PropertyService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a fresh in-memory database with the full schema for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


# Service fixtures
@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session)


# Test data factories
class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Property",
        price: int = 100000,
        currency: str = "USD",
        location: str = "Test Location",
        bedrooms: int = 2,
        bathrooms: int = 1,
        status: PropertyStatus = PropertyStatus.AVAILABLE
    ) -> dict:
        """Create flat property column values."""
        return {
            "title": title,
            "price": price,
            "currency": currency,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "status": status,
        }

    @staticmethod
    def create_payload(
        title: str = "Test Property",
        price: int = 100000,
        currency: str = "USD",
        location: str = "Test Location",
        bedrooms: int = 2,
        bathrooms: int = 1,
        status: Optional[str] = None
    ) -> dict:
        """Create a JSON request body for create/replace."""
        payload = {
            "title": title,
            "amount": {"price": price, "currency": currency},
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
        }
        if status is not None:
            payload["status"] = status
        return payload

    @staticmethod
    async def create_property(property_repo: PropertyRepository, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create(PropertyFactory.create_property_data(**kwargs))


@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    """Create a test property."""
    return await PropertyFactory.create_property(
        property_repository,
        title="Sunny Apartment",
        price=250000,
        currency="EGP",
        location="New Cairo, Cairo",
        bedrooms=3,
        bathrooms=2
    )


# Utility functions for tests
def assert_property_equal(prop1: Property, prop2: Property):
    """Assert that two properties are equal."""
    assert prop1.id == prop2.id
    assert prop1.title == prop2.title
    assert prop1.price == prop2.price
    assert prop1.currency == prop2.currency
    assert prop1.location == prop2.location
    assert prop1.bedrooms == prop2.bedrooms
    assert prop1.bathrooms == prop2.bathrooms
    assert prop1.status == prop2.status
