"""
Async HTTP client for the Property Listing Service.
Applies a request timeout and retries transient failures with exponential backoff.
"""

from typing import Any, List, Optional
import asyncio
import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.client.forms import PropertyFormData
from app.schemas.property import PropertyResponse, PropertyStatistics
from app.schemas.response import ApiResponse

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "No response from server. Please check your connection."
TIMEOUT_MESSAGE = "Request timed out. Please try again."
DEFAULT_ERROR_MESSAGE = "An error occurred"


class ApiError(Exception):
    """
    Failed API call.

    `status` is the HTTP status code, or 0 when no response was received.
    """

    def __init__(self, status: int, message: str, data: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.data = data

    @property
    def is_transport_error(self) -> bool:
        """True when the server could not be reached."""
        return self.status == 0

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


class PropertyApiClient:
    """
    Client for the property endpoints.

    Responses without an HTTP status (connection errors, timeouts) and 5xx responses
    are retried up to `max_retries` times, waiting `retry_delay * 2**attempt` seconds
    before each retry. Client errors (4xx) are returned to the caller immediately.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.max_retries = settings.client_max_retries if max_retries is None else max_retries
        self.retry_delay = settings.client_retry_delay_seconds if retry_delay is None else retry_delay
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=settings.client_timeout_seconds if timeout is None else timeout,
            headers={"Content-Type": "application/json"},
            transport=transport
        )

    async def __aenter__(self) -> "PropertyApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_all(
        self,
        page: Optional[int] = None,
        take: Optional[int] = None,
        search: Optional[str] = None
    ) -> ApiResponse[List[PropertyResponse]]:
        """Fetch one page of properties."""
        params = {}
        if page is not None:
            params["page"] = page
        if take is not None:
            params["take"] = take
        if search:
            params["search"] = search

        body = await self._request("GET", "/properties", params=params)
        return self._parse(ApiResponse[List[PropertyResponse]], body)

    async def create(self, form: PropertyFormData) -> ApiResponse[PropertyResponse]:
        """Create a property from form values."""
        body = await self._request("POST", "/properties", json=self._payload(form))
        return self._parse(ApiResponse[PropertyResponse], body)

    async def update(self, property_id: str, form: PropertyFormData) -> ApiResponse[PropertyResponse]:
        """Replace a property with form values."""
        body = await self._request("PUT", f"/properties/{property_id}", json=self._payload(form))
        return self._parse(ApiResponse[PropertyResponse], body)

    async def delete(self, property_id: str) -> ApiResponse[Any]:
        """Delete a property."""
        body = await self._request("DELETE", f"/properties/{property_id}")
        return self._parse(ApiResponse[Any], body)

    async def get_statistics(self) -> ApiResponse[PropertyStatistics]:
        """Fetch collection statistics."""
        body = await self._request("GET", "/properties/statistics")
        return self._parse(ApiResponse[PropertyStatistics], body)

    @staticmethod
    def _payload(form: PropertyFormData) -> dict:
        return form.to_payload().model_dump(mode="json", by_alias=True)

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """
        Send a request, retrying transient failures.

        Returns:
            Decoded JSON body of the successful response

        Raises:
            ApiError: If the request ultimately fails
        """
        attempt = 0
        while True:
            try:
                response = await self._client.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                if attempt < self.max_retries:
                    await self._backoff(method, url, attempt, f"timeout: {e}")
                    attempt += 1
                    continue
                raise ApiError(0, TIMEOUT_MESSAGE) from e
            except httpx.TransportError as e:
                if attempt < self.max_retries:
                    await self._backoff(method, url, attempt, f"transport error: {e}")
                    attempt += 1
                    continue
                raise ApiError(0, NO_RESPONSE_MESSAGE) from e

            if response.status_code >= 500 and attempt < self.max_retries:
                await self._backoff(method, url, attempt, f"status {response.status_code}")
                attempt += 1
                continue

            if response.is_error:
                raise self._error_from_response(response)

            return self._json(response)

    async def _backoff(self, method: str, url: str, attempt: int, reason: str) -> None:
        delay = self.retry_delay * (2 ** attempt)
        logger.warning(
            f"Retrying {method} {url} in {delay:.2f}s ({reason})",
            extra={"attempt": attempt + 1, "max_retries": self.max_retries, "delay": delay}
        )
        await asyncio.sleep(delay)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise ApiError(response.status_code, "Invalid JSON in server response")

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ApiError:
        """Build an ApiError carrying the server's message when there is one."""
        try:
            data = response.json()
        except ValueError:
            data = None

        message = DEFAULT_ERROR_MESSAGE
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]

        logger.info(f"API error {response.status_code}: {message}")
        return ApiError(response.status_code, message, data)

    @staticmethod
    def _parse(model: Any, body: Any) -> Any:
        try:
            return model.model_validate(body)
        except PydanticValidationError as e:
            logger.error(f"Unexpected response shape: {e}")
            raise ApiError(500, "An unexpected error occurred", body) from e
