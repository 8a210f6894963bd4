#!/usr/bin/env python3
"""
Database management script.
Creates and drops the schema, seeds sample listings and checks connectivity.
"""

import asyncio
import sys
import argparse
import logging
from pathlib import Path

# Add the app directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from app.config import settings
from app.database import (
    AsyncSessionLocal,
    check_database_connection,
    close_db_connection,
    create_tables,
    drop_tables,
)
from app.models.property import Property, PropertyStatus

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


SAMPLE_PROPERTIES = [
    {
        "title": "Sunny 2BR Apartment",
        "price": 250000,
        "currency": "EGP",
        "location": "New Cairo, Cairo",
        "bedrooms": 2,
        "bathrooms": 1,
        "status": PropertyStatus.AVAILABLE,
    },
    {
        "title": "Family Villa with Garden",
        "price": 1250000,
        "currency": "EGP",
        "location": "Sheikh Zayed, Giza",
        "bedrooms": 5,
        "bathrooms": 4,
        "status": PropertyStatus.AVAILABLE,
    },
    {
        "title": "Downtown Studio",
        "price": 180000,
        "currency": "SAR",
        "location": "Olaya, Riyadh",
        "bedrooms": 1,
        "bathrooms": 1,
        "status": PropertyStatus.SOLD,
    },
    {
        "title": "Marina View Penthouse",
        "price": 420000000,
        "currency": "AED",
        "location": "Dubai Marina, Dubai",
        "bedrooms": 4,
        "bathrooms": 3,
        "status": PropertyStatus.AVAILABLE,
    },
]


class MigrationManager:
    """Manages the database schema and sample data."""

    async def create_schema(self) -> None:
        """Create all tables and indexes that do not exist yet."""
        logger.info(f"Creating schema on {self._safe_url()}")
        await create_tables()

    async def drop_schema(self) -> None:
        """Drop all tables (development and test only)."""
        logger.warning("Dropping all tables - all data will be lost!")
        await drop_tables()

    async def seed_database(self) -> None:
        """Insert sample property listings."""
        logger.info("Seeding database with sample properties")

        async with AsyncSessionLocal() as session:
            try:
                session.add_all([Property(**data) for data in SAMPLE_PROPERTIES])
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to seed database: {e}")
                raise

        logger.info(f"Database seeded with {len(SAMPLE_PROPERTIES)} properties")

    async def reset_database(self) -> None:
        """Drop, recreate and seed the database."""
        if not settings.is_development and not settings.is_testing:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await self.drop_schema()
        await self.create_schema()
        await self.seed_database()
        logger.info("Database reset completed")

    async def check(self) -> bool:
        """Check database connectivity."""
        connected = await check_database_connection()
        if not connected:
            logger.error(f"Could not connect to {self._safe_url()}")
        return connected

    @staticmethod
    def _safe_url() -> str:
        url = settings.database_url
        return url.split("@")[1] if "@" in url else url


async def run(command: str, args: argparse.Namespace) -> int:
    manager = MigrationManager()
    try:
        if command == "create":
            await manager.create_schema()
        elif command == "drop":
            await manager.drop_schema()
        elif command == "seed":
            await manager.seed_database()
        elif command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return 1
            await manager.reset_database()
        elif command == "check":
            return 0 if await manager.check() else 1
        return 0
    finally:
        await close_db_connection()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Property Listing Service database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create tables and indexes")
    subparsers.add_parser("drop", help="Drop all tables (development only)")
    subparsers.add_parser("seed", help="Insert sample properties")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("check", help="Check database connectivity")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    try:
        exit_code = asyncio.run(run(args.command, args))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
