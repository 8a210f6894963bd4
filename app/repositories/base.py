"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.database import Base
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations. Database errors are logged
    and propagated; callers decide how to classify them.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: Identifier of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == id))
            obj = result.scalar_one_or_none()

            if obj is None:
                logger.debug(f"{self.model.__name__} with id {id} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise

    async def replace(self, id: str, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Overwrite the supplied fields of a record.

        Args:
            id: Identifier of the record to update
            obj_in: Field values to write

        Returns:
            Updated model instance if found, None otherwise
        """
        try:
            db_obj = await self.get_by_id(id)
            if db_obj is None:
                return None

            for field, value in obj_in.items():
                setattr(db_obj, field, value)

            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Updated {self.model.__name__} with id: {id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {id}: {e}")
            raise

    async def delete(self, id: str) -> bool:
        """
        Permanently delete a record by its ID.

        Args:
            id: Identifier of the record to delete

        Returns:
            True if record was deleted, False if not found
        """
        try:
            db_obj = await self.get_by_id(id)
            if db_obj is None:
                return False

            await self.db.delete(db_obj)
            await self.db.commit()
            logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            return True
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def count(self) -> int:
        """Count all records."""
        try:
            result = await self.db.execute(select(func.count(self.model.id)))
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise
