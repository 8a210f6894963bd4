"""
Client package for the Property Listing Service.
API client, property state store, column layout persistence and search debounce.
"""

from .api import ApiError, PropertyApiClient
from .columns import COLUMNS_STORAGE_KEY, DEFAULT_COLUMNS, ColumnConfig, ColumnKey, ColumnLayoutManager
from .debounce import Debouncer
from .forms import PropertyFormData, to_major_units, to_minor_units
from .storage import LocalStorage
from .store import PropertyState, PropertyStore

__all__ = [
    "ApiError",
    "PropertyApiClient",
    "COLUMNS_STORAGE_KEY",
    "DEFAULT_COLUMNS",
    "ColumnConfig",
    "ColumnKey",
    "ColumnLayoutManager",
    "Debouncer",
    "PropertyFormData",
    "to_major_units",
    "to_minor_units",
    "LocalStorage",
    "PropertyState",
    "PropertyStore",
]
