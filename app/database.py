"""
Database connection and session management.
Handles async database operations with SQLAlchemy and connection pooling.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, DateTime, String
from app.config import settings
from app.utils.object_id import generate_object_id
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Build engine keyword arguments suited to the configured driver."""
    options: Dict[str, Any] = {"echo": settings.database_echo}
    if database_url.startswith("sqlite"):
        return options

    options.update(
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections that can be created on demand
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_timeout=30,  # Timeout for getting connection from pool
    )
    if database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {
            "server_settings": {
                "application_name": "property_listing_service",
            }
        }
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Includes common fields: id, created_at, updated_at.
    """

    # 24-character hexadecimal identifier, assigned on insert
    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


async def get_db() -> AsyncSession:
    """
    Dependency to get database session.
    Yields an async database session and ensures it's closed after use.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ping_database(session: AsyncSession) -> Dict[str, Any]:
    """
    Ping the database through the given session.

    Returns:
        Dictionary with connection state and ping result
    """
    started = time.perf_counter()
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return {"state": "disconnected", "ping": {"error": "Database unreachable"}}

    latency_ms = round((time.perf_counter() - started) * 1000, 2)
    return {"state": "connected", "ping": {"ok": 1, "latencyMs": latency_ms}}


async def check_database_connection() -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    async with AsyncSessionLocal() as session:
        status = await ping_database(session)

    if status["state"] == "connected":
        logger.info("Database connection successful")
        return True
    return False


async def create_tables():
    """
    Create all database tables and indexes.
    This will be used during application startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")


async def drop_tables():
    """
    Drop all database tables.
    This should only be used in testing or development.
    """
    if not settings.is_testing and not settings.is_development:
        raise RuntimeError("Cannot drop tables in production environment")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")


async def close_db_connection():
    """
    Close database connection.
    This should be called during application shutdown.
    """
    await engine.dispose()
    logger.info("Database connections closed")
