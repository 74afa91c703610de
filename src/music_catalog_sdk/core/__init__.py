"""Core components for Music Catalog SDK.

The authenticated fetch pipeline shared by every resource type.
"""

from __future__ import annotations

from .classifier import EnvelopeDecoder, ResponseClassifier
from .errors import ErrorFactory, scaled_status_code
from .fetcher import ResourceFetcher
from .request_builder import RequestBuilder, query_pairs
from .token_broker import TokenBroker, TokenSource, UserTokenExchange
from .token_cache import CachingTokenBroker

__all__ = [
    "CachingTokenBroker",
    "EnvelopeDecoder",
    "ErrorFactory",
    "RequestBuilder",
    "ResourceFetcher",
    "ResponseClassifier",
    "TokenBroker",
    "TokenSource",
    "UserTokenExchange",
    "query_pairs",
    "scaled_status_code",
]
