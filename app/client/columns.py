"""
Property table column layout: visibility and order, persisted in local storage.
"""

from enum import Enum
from typing import List, Optional
import json
import logging

from pydantic import BaseModel, Field, TypeAdapter, ValidationError as PydanticValidationError

from app.client.storage import LocalStorage

logger = logging.getLogger(__name__)

COLUMNS_STORAGE_KEY = "property-columns-config"


class ColumnKey(str, Enum):
    TITLE = "title"
    PRICE = "price"
    LOCATION = "location"
    BEDROOMS = "bedrooms"
    BATHROOMS = "bathrooms"
    STATUS = "status"
    ACTIONS = "actions"


class ColumnConfig(BaseModel):
    key: ColumnKey
    label: str
    visible: bool = True
    order: int = Field(..., ge=1)


DEFAULT_COLUMNS: List[ColumnConfig] = [
    ColumnConfig(key=ColumnKey.TITLE, label="Title", visible=True, order=1),
    ColumnConfig(key=ColumnKey.PRICE, label="Price", visible=True, order=2),
    ColumnConfig(key=ColumnKey.LOCATION, label="Location", visible=True, order=3),
    ColumnConfig(key=ColumnKey.BEDROOMS, label="Bedrooms", visible=True, order=4),
    ColumnConfig(key=ColumnKey.BATHROOMS, label="Bathrooms", visible=True, order=5),
    ColumnConfig(key=ColumnKey.STATUS, label="Status", visible=True, order=6),
    ColumnConfig(key=ColumnKey.ACTIONS, label="Actions", visible=True, order=7),
]

_columns_adapter = TypeAdapter(List[ColumnConfig])


def default_columns() -> List[ColumnConfig]:
    return [column.model_copy() for column in DEFAULT_COLUMNS]


class ColumnLayoutManager:
    """
    Loads, edits and saves the column layout.

    A stored layout is discarded in favour of the default layout when it cannot
    be parsed, does not hold each known column exactly once, or repeats an order.
    Every edit is saved immediately.
    """

    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or LocalStorage()
        self.columns: List[ColumnConfig] = self.load()

    def load(self) -> List[ColumnConfig]:
        raw = self.storage.get_item(COLUMNS_STORAGE_KEY)
        if raw is None:
            return default_columns()

        try:
            columns = _columns_adapter.validate_python(json.loads(raw))
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to load column layout, using defaults: {e}")
            return default_columns()

        keys = [column.key for column in columns]
        if len(keys) != len(DEFAULT_COLUMNS) or set(keys) != {column.key for column in DEFAULT_COLUMNS}:
            logger.warning("Stored column layout does not match the known columns, using defaults")
            return default_columns()

        if len({column.order for column in columns}) != len(columns):
            logger.warning("Stored column layout has duplicate orders, using defaults")
            return default_columns()

        return columns

    def save(self, columns: Optional[List[ColumnConfig]] = None) -> None:
        if columns is not None:
            self.columns = columns
        payload = _columns_adapter.dump_json(self.columns, indent=2).decode("utf-8")
        try:
            self.storage.set_item(COLUMNS_STORAGE_KEY, payload)
        except OSError as e:
            logger.error(f"Failed to save column layout: {e}")

    def set_visibility(self, key: ColumnKey, visible: bool) -> None:
        self.columns = [
            column.model_copy(update={"visible": visible}) if column.key == key else column
            for column in self.columns
        ]
        self.save()

    def move(self, key: ColumnKey, new_index: int) -> None:
        """Move a column to `new_index` in display order and renumber orders from 1."""
        ordered = sorted(self.columns, key=lambda column: column.order)
        current = next((i for i, column in enumerate(ordered) if column.key == key), None)
        if current is None:
            raise KeyError(f"Unknown column: {key}")

        column = ordered.pop(current)
        new_index = max(0, min(new_index, len(ordered)))
        ordered.insert(new_index, column)

        self.columns = [
            column.model_copy(update={"order": position})
            for position, column in enumerate(ordered, start=1)
        ]
        self.save()

    def reset(self) -> None:
        self.columns = default_columns()
        self.save()

    def visible_columns(self) -> List[ColumnConfig]:
        return sorted(
            (column for column in self.columns if column.visible),
            key=lambda column: column.order
        )
