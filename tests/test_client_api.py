"""
Tests for the async API client.
Tests response parsing, retry with exponential backoff, and error mapping.
"""

import json
import pytest
import httpx
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from app.client.api import ApiError, NO_RESPONSE_MESSAGE, PropertyApiClient
from app.client.forms import PropertyFormData

PROPERTY_JSON = {
    "id": "65f1c2a9e4b0a1b2c3d4e5f6",
    "title": "Sunny Flat",
    "amount": {"price": 1234, "currency": "USD"},
    "location": "Downtown Area",
    "bedrooms": 2,
    "bathrooms": 1,
    "status": "available",
    "createdAt": "2024-03-13T10:00:00Z",
    "updatedAt": "2024-03-13T10:00:00Z",
}


def envelope(data=None, status_code=200, message="OK", meta=None):
    body = {
        "status": "success" if status_code < 400 else "fail",
        "message": message,
        "statusCode": status_code,
    }
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body


def make_client(handler, **kwargs) -> PropertyApiClient:
    kwargs.setdefault("retry_delay", 1.0)
    return PropertyApiClient(
        base_url="http://api.test",
        transport=httpx.MockTransport(handler),
        **kwargs
    )


def make_form(**overrides) -> PropertyFormData:
    data = {
        "title": "Sunny Flat",
        "price": Decimal("12.34"),
        "currency": "usd",
        "location": "Downtown Area",
        "bedrooms": 2,
        "bathrooms": 1,
    }
    data.update(overrides)
    return PropertyFormData(**data)


class TestRequests:
    """Test requests and response parsing."""

    @pytest.mark.asyncio
    async def test_get_all(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            meta = {"totalItems": 1, "itemCount": 1, "itemsPerPage": 10, "totalPages": 1, "currentPage": 1}
            return httpx.Response(200, json=envelope([PROPERTY_JSON], meta=meta))

        async with make_client(handler) as client:
            response = await client.get_all(page=1, take=10, search="sun")

        assert seen["url"].path == "/properties"
        assert seen["url"].params["page"] == "1"
        assert seen["url"].params["take"] == "10"
        assert seen["url"].params["search"] == "sun"
        assert response.status == "success"
        assert response.data[0].amount.price == 1234
        assert response.meta.total_items == 1

    @pytest.mark.asyncio
    async def test_get_all_omits_empty_search(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=envelope([]))

        async with make_client(handler) as client:
            await client.get_all(page=2, take=5, search="")

        assert seen["params"] == {"page": "2", "take": "5"}

    @pytest.mark.asyncio
    async def test_create_sends_minor_units(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=envelope(PROPERTY_JSON, status_code=201))

        async with make_client(handler) as client:
            response = await client.create(make_form())

        assert seen["method"] == "POST"
        assert seen["body"]["amount"] == {"price": 1234, "currency": "USD"}
        assert seen["body"]["status"] == "available"
        assert response.data.id == PROPERTY_JSON["id"]

    @pytest.mark.asyncio
    async def test_update_and_delete_paths(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            if request.method == "PUT":
                return httpx.Response(200, json=envelope(PROPERTY_JSON))
            return httpx.Response(200, json=envelope(message="Property deleted successfully"))

        async with make_client(handler) as client:
            await client.update(PROPERTY_JSON["id"], make_form())
            deleted = await client.delete(PROPERTY_JSON["id"])

        assert seen == [
            ("PUT", f"/properties/{PROPERTY_JSON['id']}"),
            ("DELETE", f"/properties/{PROPERTY_JSON['id']}"),
        ]
        assert deleted.message == "Property deleted successfully"
        assert deleted.data is None

    @pytest.mark.asyncio
    async def test_get_statistics(self):
        stats = {
            "totalProperties": 2,
            "averagePrice": {"USD": 1500.0},
            "statusCount": {"available": 1, "sold": 1},
            "locationStats": [
                {"location": "Downtown Area", "averageBedrooms": 2.5, "averageBathrooms": 1.5, "count": 2}
            ],
        }

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/properties/statistics"
            return httpx.Response(200, json=envelope(stats))

        async with make_client(handler) as client:
            response = await client.get_statistics()

        assert response.data.total_properties == 2
        assert response.data.status_count.sold == 1
        assert response.data.location_stats[0].average_bedrooms == 2.5


class TestRetry:
    """Test retry behavior."""

    @pytest.mark.asyncio
    async def test_retries_server_errors_with_backoff(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json=envelope(status_code=503, message="Service unavailable"))

        sleep = AsyncMock()
        with patch("app.client.api.asyncio.sleep", sleep):
            async with make_client(handler, max_retries=3, retry_delay=1.0) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.get_all()

        assert len(calls) == 4
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 4.0]
        assert exc_info.value.status == 503
        assert exc_info.value.message == "Service unavailable"
        assert not exc_info.value.is_transport_error

    @pytest.mark.asyncio
    async def test_recovers_after_transient_error(self):
        responses = [
            httpx.Response(500, json=envelope(status_code=500, message="boom")),
            httpx.Response(200, json=envelope([])),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        with patch("app.client.api.asyncio.sleep", AsyncMock()):
            async with make_client(handler) as client:
                response = await client.get_all()

        assert response.status == "success"
        assert responses == []

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400, json=envelope(status_code=400, message="Validation failed: title: too short"))

        sleep = AsyncMock()
        with patch("app.client.api.asyncio.sleep", sleep):
            async with make_client(handler) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.create(make_form())

        assert len(calls) == 1
        sleep.assert_not_awaited()
        assert exc_info.value.status == 400
        assert exc_info.value.message == "Validation failed: title: too short"
        assert exc_info.value.data["statusCode"] == 400

    @pytest.mark.asyncio
    async def test_transport_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with patch("app.client.api.asyncio.sleep", AsyncMock()):
            async with make_client(handler, max_retries=2) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.get_all()

        assert len(calls) == 3
        assert exc_info.value.status == 0
        assert exc_info.value.is_transport_error
        assert exc_info.value.message == NO_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with patch("app.client.api.asyncio.sleep", AsyncMock()):
            async with make_client(handler, max_retries=0) as client:
                with pytest.raises(ApiError) as exc_info:
                    await client.get_all()

        assert exc_info.value.is_transport_error
        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_error_without_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Not Found")

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.delete(PROPERTY_JSON["id"])

        assert exc_info.value.status == 404
        assert exc_info.value.message == "An error occurred"
