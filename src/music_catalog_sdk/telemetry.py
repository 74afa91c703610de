"""OpenTelemetry and structlog integration for Music Catalog SDK.

Provides request tracing and the verbosity-controlled structured logger.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .types import Verbosity

if TYPE_CHECKING:
    from collections.abc import Generator

    from structlog.typing import Processor

    from .config import TelemetryConfig

# Module-level tracer and logger
_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get or create the SDK tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("music-catalog-sdk", "0.1.0")
    return _tracer


def get_logger() -> structlog.BoundLogger:
    """Get or create the SDK logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger("music-catalog-sdk")
    return _logger


def configure_telemetry(config: TelemetryConfig) -> None:
    """Configure logging and tracing based on config.

    Verbose output is rendered for the console; otherwise only critical
    events are emitted, as JSON.

    Args:
        config: Telemetry configuration.
    """
    global _tracer, _logger

    structlog.configure(
        processors=_processors(config.verbosity),
        wrapper_class=structlog.make_filtering_bound_logger(config.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _logger = structlog.get_logger(config.service_name)

    if not config.enabled:
        _tracer = trace.NoOpTracer()
        return

    _tracer = trace.get_tracer(config.service_name, "0.1.0")


def _processors(verbosity: Verbosity) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if verbosity == Verbosity.VERBOSE:
        return [*shared, structlog.dev.ConsoleRenderer(colors=False)]
    return [
        *shared,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Context manager for tracing an operation.

    Args:
        name: Name of the operation.
        attributes: Optional span attributes.

    Yields:
        The active span.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
