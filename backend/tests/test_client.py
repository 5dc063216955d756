"""
Tests for the shared HTTP client.
"""
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from routekit.core.client import Client, RoutingRequest
from routekit.core.config import settings


class TestRoutingRequest:
    """Tests for RoutingRequest."""

    def test_method_from_body(self):
        """Test POST with a body, GET without."""
        assert RoutingRequest("/route", post_params={"points": []}).method == "POST"
        assert RoutingRequest("/isochrone", get_params={"point": "1,2"}).method == "GET"

    def test_query_drops_none(self):
        """Test unset query values are not sent."""
        request = RoutingRequest("/isochrone", get_params={"point": "1,2", "key": None})

        assert request.query == {"point": "1,2"}

    def test_describe(self):
        """Test the dry-run description."""
        request = RoutingRequest("/isochrone", get_params={"point": "1,2", "key": None})
        description = request.describe("http://localhost:8989/")

        lines = description.splitlines()
        assert lines[0].startswith("URL: http://localhost:8989/isochrone?point=")
        assert lines[1:] == [
            "Method: GET",
            'Query Params: {"point": "1,2"}',
            "Body: null",
        ]


class TestClientConfiguration:
    """Tests for Client defaults."""

    def test_defaults_from_settings(self):
        """Test unset options fall back to settings."""
        client = Client("https://graphhopper.com/api/1/")

        assert client.base_url == "https://graphhopper.com/api/1"
        assert client.headers["User-Agent"] == settings.ROUTING_USER_AGENT
        assert client.headers["Content-Type"] == "application/json"
        assert client.timeout == settings.ROUTING_TIMEOUT_MS
        assert client.max_retries == settings.ROUTING_MAX_RETRIES
        assert client.retry_over_query_limit == settings.ROUTING_RETRY_OVER_QUERY_LIMIT

    def test_custom_headers_merged(self):
        """Test custom headers extend and override defaults."""
        client = Client(
            "http://localhost",
            user_agent="agent/1",
            headers={"Content-Type": "application/geo+json", "X-Key": "1"},
        )

        assert client.headers == {
            "User-Agent": "agent/1",
            "Content-Type": "application/geo+json",
            "X-Key": "1",
        }

    def test_zero_retries_kept(self):
        """Test max_retries=0 is not replaced by the default."""
        client = Client("http://localhost", max_retries=0)

        assert client.max_retries == 0

    def test_retry_delay_capped(self):
        """Test exponential back-off is capped by retry_timeout."""
        client = Client("http://localhost", retry_timeout=150)

        assert client._retry_delay(0) == pytest.approx(0.1)
        assert client._retry_delay(5) == pytest.approx(0.15)


class TestClientRequest:
    """Tests for Client.request with httpx.MockTransport."""

    @pytest.fixture
    def make_client(self, recording_handler):
        def _make(**kwargs):
            return Client(
                "http://localhost:8989",
                transport=httpx.MockTransport(recording_handler),
                **kwargs,
            )

        return _make

    @pytest.mark.asyncio
    async def test_get(self, make_client, recording_handler):
        """Test GET with query parameters."""
        recording_handler.queue(200, {"polygons": []})
        client = make_client()

        data = await client.request(
            RoutingRequest("/isochrone", get_params={"point": "1,2", "key": None})
        )

        sent = recording_handler.requests[0]
        assert data == {"polygons": []}
        assert sent.method == "GET"
        assert dict(sent.url.params) == {"point": "1,2"}
        assert sent.headers["User-Agent"] == settings.ROUTING_USER_AGENT

    @pytest.mark.asyncio
    async def test_post(self, make_client, recording_handler):
        """Test POST with a JSON body."""
        recording_handler.queue(200, {"paths": []})
        client = make_client()

        await client.request(RoutingRequest("/route?key=abc", post_params={"profile": "car"}))

        sent = recording_handler.requests[0]
        assert sent.method == "POST"
        assert sent.url.params["key"] == "abc"
        assert recording_handler.body() == {"profile": "car"}

    @pytest.mark.asyncio
    async def test_error_status_raises(self, make_client, recording_handler):
        """Test non-2xx answers raise HTTPStatusError."""
        recording_handler.queue(500, {"message": "boom"})
        client = make_client()

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.request(RoutingRequest("/route", post_params={}))

        assert exc_info.value.response.status_code == 500

    @pytest.mark.asyncio
    async def test_429_not_retried_by_default(self, make_client, recording_handler):
        """Test 429 fails immediately without retry_over_query_limit."""
        recording_handler.queue(429, {"message": "slow down"})
        client = make_client(retry_over_query_limit=False)

        with pytest.raises(httpx.HTTPStatusError):
            await client.request(RoutingRequest("/route", post_params={}))

        assert len(recording_handler.requests) == 1

    @pytest.mark.asyncio
    async def test_429_retried(self, make_client, recording_handler):
        """Test 429 answers are retried until success."""
        recording_handler.queue(429, {"message": "slow down"})
        recording_handler.queue(429, {"message": "slow down"})
        recording_handler.queue(200, {"paths": []})
        client = make_client(retry_over_query_limit=True, max_retries=3)

        with patch("routekit.core.client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            data = await client.request(RoutingRequest("/route", post_params={}))

        assert data == {"paths": []}
        assert len(recording_handler.requests) == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_429_retries_exhausted(self, make_client, recording_handler):
        """Test the final 429 is raised after max_retries."""
        recording_handler.queue(429, {"message": "slow down"})
        client = make_client(retry_over_query_limit=True, max_retries=2)

        with patch("routekit.core.client.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await client.request(RoutingRequest("/route", post_params={}))

        assert exc_info.value.response.status_code == 429
        assert len(recording_handler.requests) == 3

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, make_client, recording_handler):
        """Test only 429 triggers a retry."""
        recording_handler.queue(503, {"message": "unavailable"})
        client = make_client(retry_over_query_limit=True, max_retries=3)

        with pytest.raises(httpx.HTTPStatusError):
            await client.request(RoutingRequest("/route", post_params={}))

        assert len(recording_handler.requests) == 1

    @pytest.mark.asyncio
    async def test_non_json_body_raises_decoding_error(self):
        """Test a 2xx answer that is not JSON raises httpx.DecodingError."""
        client = Client(
            "http://localhost:8989",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, content=b"<html>proxy</html>")
            ),
        )

        with pytest.raises(httpx.DecodingError) as exc_info:
            await client.request(RoutingRequest("/route", post_params={}))

        assert "200" in str(exc_info.value)
