"""Response classification for Music Catalog SDK.

Turns a raw transport outcome into a decoded envelope or an ApiError.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic

from pydantic import ValidationError

from ..errors import ApiError
from ..models import Envelope, ResourceT
from ..telemetry import get_logger
from ..transport import TransportOutcome
from ..types import Result
from .errors import ErrorFactory

Decoder = Callable[[bytes], Envelope[ResourceT] | None]


class EnvelopeDecoder(Generic[ResourceT]):
    """Decodes a response body into ``Envelope[resource_type]``."""

    def __init__(self, resource_type: type[ResourceT]) -> None:
        self.resource_type = resource_type
        self._envelope_type = Envelope[resource_type]  # type: ignore[valid-type]

    def __call__(self, body: bytes) -> Envelope[ResourceT] | None:
        try:
            return self._envelope_type.model_validate_json(body)
        except ValidationError as e:
            get_logger().debug(
                "Envelope decode failed",
                resource_type=self.resource_type.__name__,
                errors=e.error_count(),
            )
            return None


class ResponseClassifier:
    """Classifies transport outcomes. Stateless."""

    def classify(
        self,
        outcome: TransportOutcome,
        decode: Decoder[ResourceT],
    ) -> Result[Envelope[ResourceT]]:
        """Classify ``outcome``; the first matching rule wins.

        1. Transport error: the body's first service error if it has one,
           otherwise an error synthesized from the status and exception.
        2. Body: the decoded envelope, errors not inspected.
        3. Nothing: the "no usable response" error.
        """
        if outcome.transport_error is not None:
            return Result.failure(
                self._transport_failure(outcome.transport_error, outcome, decode)
            )

        # An empty body counts as no body
        if outcome.body:
            return Result.success(self._decode_or_empty(outcome.body, decode))

        return Result.failure(ErrorFactory.no_response())

    def _transport_failure(
        self,
        error: BaseException,
        outcome: TransportOutcome,
        decode: Decoder[ResourceT],
    ) -> ApiError:
        envelope = self._decode(outcome.body, decode) if outcome.body else None
        if envelope is not None and envelope.errors:
            return envelope.errors[0]
        return ErrorFactory.from_transport_error(error, outcome.status_code)

    def _decode_or_empty(
        self, body: bytes, decode: Decoder[ResourceT]
    ) -> Envelope[ResourceT]:
        """Decode a body that arrived without a transport error.

        An undecodable body becomes an empty, error-free envelope.
        """
        envelope = self._decode(body, decode)
        if envelope is None:
            get_logger().debug("Undecodable response body treated as empty")
            return Envelope()
        return envelope

    def _decode(
        self, body: bytes, decode: Decoder[ResourceT]
    ) -> Envelope[ResourceT] | None:
        # Decoders are caller-supplied; none of their failures leave here
        try:
            return decode(body)
        except Exception as e:
            get_logger().debug(
                "Decoder raised", error=str(e), error_type=type(e).__name__
            )
            return None
