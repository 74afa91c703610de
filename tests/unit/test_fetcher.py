"""End-to-end tests for ResourceFetcher over stubbed HTTP."""

import asyncio

import httpx
import pytest

from music_catalog_sdk.config import CatalogConfig
from music_catalog_sdk.core.fetcher import ResourceFetcher
from music_catalog_sdk.core.token_broker import TokenBroker
from music_catalog_sdk.errors import ErrorKind
from music_catalog_sdk.models import Resource
from music_catalog_sdk.resources import Storefront
from music_catalog_sdk.transport import HttpxTransport, TransportOutcome
from music_catalog_sdk.types import AuthMode

from ..stubs import (
    SERVICE_TOKEN,
    STOREFRONT_US,
    UNAUTHORIZED_BODY,
    USER_TOKEN,
    RecordingExchange,
    ServiceStub,
    StubTransport,
    json_body,
)


def make_fetcher(
    config: CatalogConfig,
    stub: ServiceStub,
    exchange: RecordingExchange | None = None,
    transport=None,
) -> ResourceFetcher:
    client = stub.client()
    return ResourceFetcher(
        config,
        TokenBroker(config, client, exchange),
        transport or HttpxTransport(client),
    )


class TestFetchOne:
    """Tests for fetch_one."""

    def test_storefront(self, base_config: CatalogConfig, service_stub: ServiceStub) -> None:
        fetcher = make_fetcher(base_config, service_stub)

        result = asyncio.run(
            fetcher.fetch_one("/v1/storefronts/us", Storefront, [], AuthMode.SERVICE)
        )

        assert result.ok
        assert result.value.attributes.name == "United States"
        (request,) = service_stub.api_requests
        assert str(request.url) == "https://api.music.apple.com/v1/storefronts/us"
        assert request.headers["Authorization"] == f"Bearer {SERVICE_TOKEN}"
        assert "Music-User-Token" not in request.headers

    def test_unauthorized(self, base_config: CatalogConfig) -> None:
        stub = ServiceStub(api_response=httpx.Response(401, json=UNAUTHORIZED_BODY))
        fetcher = make_fetcher(base_config, stub)

        result = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront))

        assert not result.ok
        assert result.error.status == "401"
        assert result.error.title == "Unauthorized request"

    def test_empty_data_is_none_not_error(self, base_config: CatalogConfig) -> None:
        stub = ServiceStub(api_response=httpx.Response(200, json={"data": []}))
        fetcher = make_fetcher(base_config, stub)

        result = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront))

        assert result.ok
        assert result.value is None

    def test_no_body_no_error_is_sentinel(
        self, base_config: CatalogConfig, service_stub: ServiceStub
    ) -> None:
        transport = StubTransport(TransportOutcome())
        fetcher = make_fetcher(base_config, service_stub, transport=transport)

        result = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront))

        assert not result.ok
        assert result.error.kind is ErrorKind.NO_RESPONSE
        assert len(transport.requests) == 1

    def test_idempotent(self, base_config: CatalogConfig, service_stub: ServiceStub) -> None:
        transport = StubTransport(TransportOutcome(status_code=200, body=json_body(STOREFRONT_US)))
        fetcher = make_fetcher(base_config, service_stub, transport=transport)

        first = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront, [("l", "en-us")]))
        second = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront, [("l", "en-us")]))

        assert first == second
        assert transport.requests[0] == transport.requests[1]


class TestFetchMany:
    """Tests for fetch_many and fetch_envelope."""

    def test_returns_all_items(self, base_config: CatalogConfig) -> None:
        body = {
            "data": [
                {"id": "us", "attributes": {"name": "United States"}},
                {"id": "jp", "attributes": {"name": "Japan"}},
            ]
        }
        stub = ServiceStub(api_response=httpx.Response(200, json=body))
        fetcher = make_fetcher(base_config, stub)

        result = asyncio.run(
            fetcher.fetch_many("/v1/storefronts", Storefront, [("ids", "us,jp")])
        )

        assert [s.attributes.name for s in result.value] == ["United States", "Japan"]
        assert str(stub.api_requests[0].url).endswith("/v1/storefronts?ids=us,jp")

    def test_empty(self, base_config: CatalogConfig) -> None:
        stub = ServiceStub(api_response=httpx.Response(200, json={"data": []}))
        fetcher = make_fetcher(base_config, stub)

        result = asyncio.run(fetcher.fetch_many("/v1/storefronts", Storefront))

        assert result.ok
        assert result.value == []

    def test_envelope_exposes_next(self, base_config: CatalogConfig, exchange: RecordingExchange) -> None:
        body = {
            "data": [{"id": "r.1", "type": "library-artists"}],
            "next": "/v1/me/library/artists?offset=1",
        }
        stub = ServiceStub(api_response=httpx.Response(200, json=body))
        fetcher = make_fetcher(base_config, stub, exchange)

        result = asyncio.run(
            fetcher.fetch_envelope("/v1/me/library/artists", Resource, [("limit", 1)], AuthMode.USER)
        )

        assert result.value.next == "/v1/me/library/artists?offset=1"
        request = stub.api_requests[0]
        assert request.headers["Music-User-Token"] == USER_TOKEN


class TestPropagation:
    """Broker and builder failures are returned verbatim with no request."""

    def test_missing_configuration(self, base_config: CatalogConfig, service_stub: ServiceStub) -> None:
        config = base_config.with_overrides(team_id=None)
        fetcher = make_fetcher(config, service_stub)

        result = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront))

        assert result.error.kind is ErrorKind.CONFIGURATION
        assert service_stub.requests == []

    def test_missing_user_token(self, base_config: CatalogConfig, service_stub: ServiceStub) -> None:
        fetcher = make_fetcher(base_config, service_stub, RecordingExchange(user_token=None))

        result = asyncio.run(
            fetcher.fetch_many("/v1/me/library/artists", Resource, mode=AuthMode.USER)
        )

        assert result.error.kind is ErrorKind.AUTH
        assert result.error.status == "401"
        assert service_stub.api_requests == []

    def test_no_service_token(self, base_config: CatalogConfig) -> None:
        stub = ServiceStub(token_response=httpx.Response(200, json={"error": "nope"}))
        fetcher = make_fetcher(base_config, stub)

        result = asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront))

        assert result.error.detail == (
            "Missing token, refresh current token or request a new token"
        )
        assert stub.api_requests == []

    @pytest.mark.parametrize("mode", [None, AuthMode.USER])
    def test_mode_defaults_to_config(
        self, base_config: CatalogConfig, service_stub: ServiceStub, mode: AuthMode | None
    ) -> None:
        exchange = RecordingExchange()
        config = base_config.with_overrides(auth_mode=AuthMode.USER)
        fetcher = make_fetcher(config, service_stub, exchange)

        asyncio.run(fetcher.fetch_one("/v1/storefronts/us", Storefront, mode=mode))

        assert exchange.calls == [SERVICE_TOKEN]
        assert service_stub.api_requests[0].headers["Music-User-Token"] == USER_TOKEN

    def test_absolute_url_is_used_as_given(
        self, base_config: CatalogConfig, service_stub: ServiceStub
    ) -> None:
        fetcher = make_fetcher(base_config, service_stub)

        asyncio.run(fetcher.fetch_one("https://mirror.example.com/v1/storefronts/us", Storefront))

        assert str(service_stub.api_requests[0].url) == "https://mirror.example.com/v1/storefronts/us"
