"""Async Music Catalog SDK client.

Wires the fetch pipeline to an httpx client and exposes the catalog and
library resources as one-line calls into the generic fetcher.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Self

from .core import (
    CachingTokenBroker,
    ResourceFetcher,
    TokenBroker,
    query_pairs,
)
from .models import Envelope, ResourceT
from .resources import Activity, LibraryArtist, Storefront
from .telemetry import configure_telemetry
from .transport import HttpxTransport, create_async_http_client
from .types import AuthMode, Result

if TYPE_CHECKING:
    import httpx

    from .config import CatalogConfig
    from .core import TokenSource, UserTokenExchange
    from .core.request_builder import QueryPairs
    from .transport import Transport


class MusicCatalogClient:
    """Asynchronous client for the music catalog service."""

    def __init__(
        self,
        config: CatalogConfig,
        *,
        user_token_exchange: UserTokenExchange | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize async client.

        Args:
            config: SDK configuration.
            user_token_exchange: Device exchange for user tokens; required
                for library resources.
            http_client: HTTP client to use instead of creating one. A
                client passed in is not closed by ``close()``.
            transport: Transport for resource requests; defaults to httpx.
        """
        self.config = config
        configure_telemetry(config.telemetry)

        self._owns_http = http_client is None
        self._http = http_client or create_async_http_client(config)

        token_source: TokenSource = TokenBroker(config, self._http, user_token_exchange)
        if config.token_cache.enabled:
            token_source = CachingTokenBroker(token_source, config.token_cache)
        self._token_source = token_source

        self._fetcher = ResourceFetcher(
            config,
            token_source,
            transport
            or HttpxTransport(self._http, trace_requests=config.telemetry.trace_requests),
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    def invalidate_tokens(self, mode: AuthMode | None = None) -> None:
        """Drop cached tokens for ``mode``, or for every mode.

        Call after the service rejects a token so the next fetch acquires a
        fresh one. Does nothing when token caching is disabled.
        """
        if isinstance(self._token_source, CachingTokenBroker):
            self._token_source.invalidate(mode)

    @property
    def fetcher(self) -> ResourceFetcher:
        """The generic fetcher, for resource types without a helper."""
        return self._fetcher

    async def fetch_one(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[ResourceT | None]:
        return await self._fetcher.fetch_one(resource_path, resource_type, query, mode)

    async def fetch_many(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[list[ResourceT]]:
        return await self._fetcher.fetch_many(resource_path, resource_type, query, mode)

    async def fetch_envelope(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[Envelope[ResourceT]]:
        """Fetch the whole envelope, e.g. to follow its ``next`` link."""
        return await self._fetcher.fetch_envelope(
            resource_path, resource_type, query, mode
        )

    # Storefronts

    async def get_storefront(
        self, storefront_id: str, *, lang: str | None = None
    ) -> Result[Storefront | None]:
        """Get a storefront by its two-letter code, e.g. ``"us"``.

        Example: ``/v1/storefronts/us``
        """
        return await self._fetcher.fetch_one(
            f"/v1/storefronts/{storefront_id}", Storefront, query_pairs(lang=lang)
        )

    async def get_multiple_storefronts(
        self, storefront_ids: Sequence[str], *, lang: str | None = None
    ) -> Result[list[Storefront]]:
        """Get several storefronts, e.g. ``["us", "es", "jp"]``.

        Example: ``/v1/storefronts?ids=us,es,jp``
        """
        return await self._fetcher.fetch_many(
            "/v1/storefronts",
            Storefront,
            query_pairs(ids=storefront_ids, lang=lang),
        )

    async def get_all_storefronts(
        self,
        *,
        lang: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Result[list[Storefront]]:
        """Get one page of all storefronts.

        Example: ``/v1/storefronts?l=en-us&limit=2&offset=2``
        """
        return await self._fetcher.fetch_many(
            "/v1/storefronts",
            Storefront,
            query_pairs(lang=lang, limit=limit, offset=offset),
        )

    # Activities

    async def get_activity(
        self, activity_id: str, storefront_id: str, *, lang: str | None = None
    ) -> Result[Activity | None]:
        """Get a catalog activity.

        Example: ``/v1/catalog/us/activities/926339514``
        """
        return await self._fetcher.fetch_one(
            f"/v1/catalog/{storefront_id}/activities/{activity_id}",
            Activity,
            query_pairs(lang=lang),
        )

    async def get_multiple_activities(
        self,
        activity_ids: Sequence[str],
        storefront_id: str,
        *,
        lang: str | None = None,
    ) -> Result[list[Activity]]:
        """Get several catalog activities.

        Example: ``/v1/catalog/us/activities?ids=956449513,936419203``
        """
        return await self._fetcher.fetch_many(
            f"/v1/catalog/{storefront_id}/activities",
            Activity,
            query_pairs(ids=activity_ids, lang=lang),
        )

    # Library (always user-scoped)

    async def get_library_artist(
        self, artist_id: str, *, lang: str | None = None
    ) -> Result[LibraryArtist | None]:
        """Get an artist from the user's library.

        Example: ``/v1/me/library/artists/179934``
        """
        return await self._fetcher.fetch_one(
            f"/v1/me/library/artists/{artist_id}",
            LibraryArtist,
            query_pairs(lang=lang),
            AuthMode.USER,
        )

    async def get_multiple_library_artists(
        self,
        artist_ids: Sequence[str] | None = None,
        *,
        lang: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Result[list[LibraryArtist]]:
        """Get library artists, all of them when ``artist_ids`` is None.

        Example: ``/v1/me/library/artists?ids=179934,463106``
        """
        return await self._fetcher.fetch_many(
            "/v1/me/library/artists",
            LibraryArtist,
            query_pairs(ids=artist_ids, lang=lang, limit=limit, offset=offset),
            AuthMode.USER,
        )
