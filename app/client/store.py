"""
Client-side property state container.

Holds the current page of properties with its pagination and search state, and
orchestrates listing fetches and mutations against the API. Consumers read
`state` and subscribe to changes; they never mutate state directly.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional
import logging

from app.config import settings
from app.client.api import ApiError, PropertyApiClient
from app.client.forms import PropertyFormData
from app.schemas.property import PaginationMeta, PropertyResponse

logger = logging.getLogger(__name__)

Listener = Callable[["PropertyState"], None]
Notifier = Callable[[str, str], None]


@dataclass(frozen=True)
class PropertyState:
    items: List[PropertyResponse] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    meta: Optional[PaginationMeta] = None
    current_page: int = 1
    items_per_page: int = settings.default_page_size
    search_query: str = ""


class PropertyStore:
    """
    Property listing state with fetch and mutation operations.

    Every listing fetch gets a sequence number; a response that arrives after a
    newer fetch was started is discarded. Mutations never touch `items` directly:
    on success they refetch the current page, on failure they set `error` and re-raise.

    Args:
        api: API client used for all requests
        notifier: Optional callback receiving ("success" | "error", message)
    """

    def __init__(self, api: PropertyApiClient, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier
        self._state = PropertyState()
        self._listeners: List[Listener] = []
        self._fetch_seq = 0

    @property
    def state(self) -> PropertyState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _notify(self, kind: str, message: str) -> None:
        if self.notifier is not None:
            self.notifier(kind, message)

    async def fetch_properties(self) -> None:
        """Load the current page using the current pagination and search state."""
        self._fetch_seq += 1
        seq = self._fetch_seq
        self._set(loading=True, error=None)

        current = self._state
        try:
            response = await self.api.get_all(
                page=current.current_page,
                take=current.items_per_page,
                search=current.search_query or None
            )
        except ApiError as e:
            if seq == self._fetch_seq:
                self._set(error=e.message, loading=False)
            return

        if seq != self._fetch_seq:
            logger.debug(f"Discarding stale listing response #{seq}")
            return

        if response.status == "success" and response.data is not None:
            self._set(items=response.data, meta=response.meta, loading=False)
        else:
            self._set(error=response.message or "Failed to fetch properties", loading=False)

    async def create_property(self, form: PropertyFormData) -> None:
        await self._mutate(lambda: self.api.create(form), "Property created successfully")

    async def update_property(self, property_id: str, form: PropertyFormData) -> None:
        await self._mutate(lambda: self.api.update(property_id, form), "Property updated successfully")

    async def delete_property(self, property_id: str) -> None:
        await self._mutate(lambda: self.api.delete(property_id), "Property deleted successfully")

    async def _mutate(self, call, success_message: str) -> None:
        self._set(error=None)
        try:
            response = await call()
        except ApiError as e:
            self._set(error=e.message)
            self._notify("error", e.message)
            raise

        if response.status != "success":
            error = ApiError(response.status_code, response.message, response)
            self._set(error=error.message)
            self._notify("error", error.message)
            raise error

        self._notify("success", response.message or success_message)
        await self.fetch_properties()

    async def set_page(self, page: int) -> None:
        self._set(current_page=page)
        await self.fetch_properties()

    async def set_items_per_page(self, take: int) -> None:
        self._set(items_per_page=take, current_page=1)
        await self.fetch_properties()

    async def set_search_query(self, query: str) -> None:
        """Search from page 1. A query shorter than the server minimum counts as no search."""
        query = query.strip()
        if len(query) < settings.search_min_length:
            query = ""
        self._set(search_query=query, current_page=1)
        await self.fetch_properties()

    def clear_error(self) -> None:
        self._set(error=None)

    def reset(self) -> None:
        # Outstanding fetches become stale
        self._fetch_seq += 1
        self._state = PropertyState()
        self._emit()
