"""Request construction for Music Catalog SDK.

Builds the request URL and authorization headers for a single fetch.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import httpx

from ..models import RequestDescriptor
from ..telemetry import get_logger
from ..types import AuthMode, Result
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..config import CatalogConfig
    from ..models import TokenPair

QueryValue = str | int
QueryPairs = Sequence[tuple[str, QueryValue]]


def query_pairs(
    *,
    ids: Iterable[str] | None = None,
    lang: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[tuple[str, QueryValue]]:
    """Build the conventional query pairs in service order.

    Args:
        ids: Resource ids, sent comma-joined as ``ids``.
        lang: Language tag, sent as ``l``.
        limit: Page size.
        offset: Page offset.

    Returns:
        Ordered (key, value) pairs with absent values skipped.
    """
    pairs: list[tuple[str, QueryValue]] = []
    if ids is not None:
        pairs.append(("ids", ",".join(ids)))
    if lang is not None:
        pairs.append(("l", lang))
    if limit is not None:
        pairs.append(("limit", limit))
    if offset is not None:
        pairs.append(("offset", offset))
    return pairs


def is_valid_url(url: str) -> bool:
    """Check the URL parses with an http(s) scheme and a host."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


class RequestBuilder:
    """Builds request descriptors; never performs I/O."""

    def __init__(self, config: CatalogConfig) -> None:
        """Initialize request builder.

        Args:
            config: SDK configuration.
        """
        self.config = config
        self._logger = get_logger()

    def build_url(self, base_path: str, query: QueryPairs = ()) -> str:
        """Append ``query`` to ``base_path`` in the order given."""
        if not query:
            return base_path
        return base_path + "?" + "&".join(f"{key}={value}" for key, value in query)

    def build_headers(self, tokens: TokenPair, mode: AuthMode) -> dict[str, str]:
        """Build authorization headers for a complete token pair."""
        headers = {"Authorization": f"Bearer {tokens.service_token}"}
        if mode == AuthMode.USER and tokens.user_token:
            headers[self.config.user_token_header] = tokens.user_token
        return headers

    def build(
        self,
        base_path: str,
        query: QueryPairs,
        tokens: TokenPair,
        mode: AuthMode,
    ) -> Result[RequestDescriptor]:
        """Build the request for one fetch.

        Args:
            base_path: Absolute URL of the resource, without query.
            query: Ordered (key, value) pairs.
            tokens: Token pair from the broker.
            mode: Auth mode the request is declared for.

        Returns:
            The descriptor, or a 401 error when ``tokens`` is incomplete for
            ``mode``, or a malformed-URL error.
        """
        if not tokens.is_complete_for(mode):
            self._logger.error("Missing token", mode=mode.value)
            return Result.failure(ErrorFactory.missing_token())

        url = self.build_url(base_path, query)
        if not is_valid_url(url):
            self._logger.error("Failed to create URL", url=url)
            return Result.failure(ErrorFactory.malformed_url(url))

        return Result.success(
            RequestDescriptor(url=url, headers=self.build_headers(tokens, mode))
        )
