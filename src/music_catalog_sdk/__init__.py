"""Music Catalog Python SDK."""

from .client import MusicCatalogClient
from .config import CatalogConfig, TelemetryConfig, TokenCacheConfig
from .core import ResourceFetcher, TokenBroker, UserTokenExchange, query_pairs
from .errors import ApiError, CatalogError, ErrorKind, StatusCode
from .models import Envelope, RequestDescriptor, Resource, TokenPair
from .resources import Activity, LibraryArtist, Preview, Storefront
from .transport import HttpxTransport, Transport, TransportOutcome
from .types import AuthMode, Result, Verbosity

__all__ = [
    "MusicCatalogClient",
    "CatalogConfig",
    "TelemetryConfig",
    "TokenCacheConfig",
    "ResourceFetcher",
    "TokenBroker",
    "UserTokenExchange",
    "query_pairs",
    "ApiError",
    "CatalogError",
    "ErrorKind",
    "StatusCode",
    "Envelope",
    "RequestDescriptor",
    "Resource",
    "TokenPair",
    "Activity",
    "LibraryArtist",
    "Preview",
    "Storefront",
    "HttpxTransport",
    "Transport",
    "TransportOutcome",
    "AuthMode",
    "Result",
    "Verbosity",
]

__version__ = "0.1.0"
