"""HTTP transport for Music Catalog SDK.

The pipeline only depends on the ``Transport`` protocol; ``HttpxTransport``
is the default implementation over a shared ``httpx.AsyncClient``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

from .telemetry import get_logger, trace_operation

if TYPE_CHECKING:
    from .config import CatalogConfig
    from .models import RequestDescriptor


@dataclass(frozen=True)
class TransportOutcome:
    """Raw result of one network exchange."""

    transport_error: BaseException | None = None
    status_code: int | None = None
    body: bytes | None = None


class Transport(Protocol):
    """Protocol for GET-only transports."""

    async def execute(self, request: RequestDescriptor) -> TransportOutcome:
        """Execute the request once."""
        ...


def create_async_http_client(config: CatalogConfig) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        config: SDK configuration.

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=config.connect_timeout,
            read=config.timeout,
            write=config.timeout,
            pool=config.timeout,
        ),
        headers={
            "User-Agent": "music-catalog-sdk/0.1.0 Python",
            "Accept": "application/json",
        },
        follow_redirects=False,
    )


class HttpxTransport:
    """Single-attempt transport backed by httpx."""

    def __init__(self, client: httpx.AsyncClient, *, trace_requests: bool = True) -> None:
        """Initialize transport.

        Args:
            client: Async HTTP client, owned by the caller.
            trace_requests: Whether to open a span per request.
        """
        self._client = client
        self._trace_requests = trace_requests
        self._logger = get_logger()

    async def execute(self, request: RequestDescriptor) -> TransportOutcome:
        """Execute a GET request.

        Non-2xx responses are reported as an ``httpx.HTTPStatusError``
        transport error with status and body preserved. An empty body is
        reported as no body.
        """
        self._logger.debug("Making request", url=request.url)
        if self._trace_requests:
            with trace_operation(
                "http_request",
                attributes={"http.method": "GET", "http.url": request.url},
            ) as span:
                outcome = await self._get(request)
                if outcome.status_code is not None:
                    span.set_attribute("http.status_code", outcome.status_code)
                return outcome
        return await self._get(request)

    async def _get(self, request: RequestDescriptor) -> TransportOutcome:
        try:
            response = await self._client.get(request.url, headers=request.headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.error("Request failed", url=request.url, error=str(e))
            return TransportOutcome(transport_error=e)

        error: httpx.HTTPStatusError | None = None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = e
            self._logger.error(
                "Request rejected", url=request.url, status=response.status_code
            )

        return TransportOutcome(
            transport_error=error,
            status_code=response.status_code,
            body=response.content or None,
        )
