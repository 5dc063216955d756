"""
Shared HTTP client used by all routing adapters.

Features:
- Default User-Agent / Content-Type headers merged with caller headers
- Timeout configured once, in milliseconds
- Optional exponential back-off on HTTP 429 (over query limit)
- Dry-run descriptions of requests without any network I/O

Adapters depend only on the ``RoutingTransport`` protocol, so they can be
exercised against a fake in tests.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from routekit.core.config import settings

logger = logging.getLogger(__name__)

RETRY_BASE_DELAY = 0.1  # seconds


@dataclass(frozen=True)
class RoutingRequest:
    """A provider request, as built by an adapter."""
    endpoint: str
    get_params: Optional[dict] = None
    post_params: Optional[dict] = None

    @property
    def method(self) -> str:
        return "POST" if self.post_params is not None else "GET"

    @property
    def query(self) -> dict:
        """Query parameters with unset values dropped."""
        return {k: v for k, v in (self.get_params or {}).items() if v is not None}

    def describe(self, base_url: str, headers: Optional[dict] = None) -> str:
        """Human readable description of the request, used for dry runs."""
        url = httpx.URL(base_url.rstrip("/") + self.endpoint)
        if self.query:
            url = url.copy_merge_params(self.query)
        lines = [
            f"URL: {url}",
            f"Method: {self.method}",
            f"Query Params: {json.dumps(self.query)}",
            f"Body: {json.dumps(self.post_params)}",
        ]
        if headers:
            lines.append(f"Headers: {json.dumps(headers)}")
        return "\n".join(lines)


@runtime_checkable
class RoutingTransport(Protocol):
    """Capability to perform a single provider request."""

    async def request(self, request: RoutingRequest) -> Any:
        """Perform the request and return the decoded JSON body."""
        ...


class Client:
    """
    Default ``RoutingTransport`` backed by httpx.

    Non-2xx responses raise ``httpx.HTTPStatusError``, network failures raise
    ``httpx.RequestError``; mapping those to domain errors is the adapter's job.
    """

    def __init__(
        self,
        base_url: str,
        user_agent: Optional[str] = None,
        timeout: Optional[int] = None,
        retry_over_query_limit: Optional[bool] = None,
        headers: Optional[dict] = None,
        max_retries: Optional[int] = None,
        retry_timeout: Optional[int] = None,
        **client_kwargs: Any,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "User-Agent": user_agent or settings.ROUTING_USER_AGENT,
            "Content-Type": "application/json",
            **(headers or {}),
        }
        self.timeout = timeout or settings.ROUTING_TIMEOUT_MS  # milliseconds
        self.retry_over_query_limit = (
            settings.ROUTING_RETRY_OVER_QUERY_LIMIT
            if retry_over_query_limit is None
            else retry_over_query_limit
        )
        self.max_retries = (
            settings.ROUTING_MAX_RETRIES if max_retries is None else max_retries
        )
        self.retry_timeout = retry_timeout or settings.ROUTING_RETRY_TIMEOUT_MS
        # Passed through to httpx.AsyncClient (proxy, transport, verify, ...)
        self.client_kwargs = client_kwargs

    def _retry_delay(self, attempt: int) -> float:
        return min(RETRY_BASE_DELAY * (2 ** attempt), self.retry_timeout / 1000)

    def describe(self, request: RoutingRequest) -> str:
        """Describe a request without sending it."""
        return request.describe(self.base_url, self.headers)

    async def request(self, request: RoutingRequest) -> Any:
        """
        Send a request and return the decoded JSON response.

        Args:
            request: Request built by an adapter

        Returns:
            Parsed JSON body

        Raises:
            httpx.HTTPStatusError: Provider answered with a non-2xx status
            httpx.RequestError: Network level failure, or a body that is not JSON
        """
        attempts = self.max_retries + 1 if self.retry_over_query_limit else 1

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=httpx.Timeout(self.timeout / 1000),
            **self.client_kwargs,
        ) as client:
            for attempt in range(attempts):
                logger.debug(f"{request.method} {self.base_url}{request.endpoint}")
                response = await client.request(
                    request.method,
                    request.endpoint,
                    params=request.query or None,
                    json=request.post_params,
                )

                if response.status_code == 429 and attempt < attempts - 1:
                    delay = self._retry_delay(attempt)
                    logger.info(
                        f"Over query limit on {request.endpoint} "
                        f"(attempt {attempt + 1}/{attempts}), retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    continue

                response.raise_for_status()
                try:
                    return response.json()
                except ValueError as e:
                    raise httpx.DecodingError(
                        f"Invalid JSON in {response.status_code} response from {request.endpoint}",
                        request=response.request,
                    ) from e
