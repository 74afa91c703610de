"""Generic resource fetching for Music Catalog SDK.

One pipeline for every resource type: acquire tokens, build the request,
execute it and classify the outcome.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Envelope, ResourceT
from ..telemetry import get_logger, trace_operation
from ..types import AuthMode, Result
from .classifier import EnvelopeDecoder, ResponseClassifier
from .request_builder import QueryPairs, RequestBuilder

if TYPE_CHECKING:
    from ..config import CatalogConfig
    from ..transport import Transport
    from .token_broker import TokenSource


class ResourceFetcher:
    """Fetches catalog and library resources of any decodable shape."""

    def __init__(
        self,
        config: CatalogConfig,
        token_source: TokenSource,
        transport: Transport,
        *,
        builder: RequestBuilder | None = None,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        """Initialize resource fetcher.

        Args:
            config: SDK configuration.
            token_source: Token broker, or a decorator around one.
            transport: Transport executing the built requests.
            builder: Request builder (created from config if not provided).
            classifier: Response classifier.
        """
        self.config = config
        self._token_source = token_source
        self._transport = transport
        self._builder = builder or RequestBuilder(config)
        self._classifier = classifier or ResponseClassifier()
        self._logger = get_logger()

    async def fetch_envelope(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[Envelope[ResourceT]]:
        """Fetch and classify one response.

        Args:
            resource_path: Service-relative path, or an absolute URL.
            resource_type: Model each ``data`` item decodes into.
            query: Ordered query pairs.
            mode: Auth mode; defaults to the configured one.

        Returns:
            The decoded envelope, or the first error the pipeline hit.
        """
        mode = mode or self.config.auth_mode
        url = self.config.resolve_url(resource_path)

        with trace_operation(
            "fetch_resource",
            attributes={"resource.path": resource_path, "auth.mode": mode.value},
        ):
            tokens = await self._token_source.acquire(mode)
            if tokens.error is not None:
                return Result.failure(tokens.error)

            request = self._builder.build(url, query, tokens.value, mode)
            if request.error is not None:
                return Result.failure(request.error)

            outcome = await self._transport.execute(request.value)
            result = self._classifier.classify(outcome, EnvelopeDecoder(resource_type))

        if result.error is not None:
            self._logger.error(
                "Request failed",
                url=request.value.url,
                title=result.error.title,
                status=result.error.status,
                kind=result.error.kind.value,
            )
        else:
            self._logger.debug("Request successful", url=request.value.url)
        return result

    async def fetch_one(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[ResourceT | None]:
        """Fetch the first resource of the response, or None if empty."""
        result = await self.fetch_envelope(resource_path, resource_type, query, mode)
        if result.error is not None:
            return Result.failure(result.error)
        return Result.success(result.value.first)

    async def fetch_many(
        self,
        resource_path: str,
        resource_type: type[ResourceT],
        query: QueryPairs = (),
        mode: AuthMode | None = None,
    ) -> Result[list[ResourceT]]:
        """Fetch every resource of the response, possibly none."""
        result = await self.fetch_envelope(resource_path, resource_type, query, mode)
        if result.error is not None:
            return Result.failure(result.error)
        return Result.success(list(result.value.data))
