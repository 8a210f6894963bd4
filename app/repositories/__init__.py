"""
Repository layer for data access operations.
"""

from .base import BaseRepository
from .property import PropertyRepository

__all__ = ["BaseRepository", "PropertyRepository"]
