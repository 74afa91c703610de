"""Error values for Music Catalog SDK.

Errors travel as ``ApiError`` values inside a ``Result``. They are either
decoded from a JSON:API error object returned by the service or synthesized
locally by the pipeline.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class ErrorKind(StrEnum):
    """Where in the pipeline an error originated."""

    CONFIGURATION = "configuration"
    AUTH = "auth"
    TRANSPORT = "transport"
    SERVICE = "service"
    MALFORMED_URL = "malformed_url"
    NO_RESPONSE = "no_response"


class StatusCode(IntEnum):
    """HTTP status codes documented by the catalog service."""

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    MOVED_PERMANENTLY = 301
    FOUND = 302
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    TOO_MANY_REQUESTS = 429
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503

    @classmethod
    def lookup(cls, value: Any) -> StatusCode | None:
        """Return the member for an int or numeric string, or None."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return None


class ErrorSource(BaseModel):
    """Request parameter that caused a service error."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    parameter: str | None = None


class ErrorLinks(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    about: str | None = None


class ApiError(BaseModel):
    """A single service or pipeline error."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    status: str | None = None
    code: StatusCode | None = None
    title: str | None = None
    detail: str | None = None
    source: ErrorSource | None = None
    links: ErrorLinks | None = None
    meta: dict[str, Any] | None = None

    # Wire ``code`` values outside StatusCode (the service sends e.g. "40100")
    service_code: str | None = None
    kind: ErrorKind = ErrorKind.SERVICE

    @model_validator(mode="before")
    @classmethod
    def normalize_wire_fields(cls, data: Any) -> Any:
        """Stringify a numeric status and classify the raw wire code.

        The raw code is kept in ``service_code``.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("status"), int):
            data["status"] = str(data["status"])
        raw = data.get("code")
        if raw is not None and not isinstance(raw, StatusCode):
            data.setdefault("service_code", str(raw))
            data["code"] = StatusCode.lookup(raw)
        return data

    @property
    def parameter(self) -> str | None:
        """Offending request parameter, if the service reported one."""
        return self.source.parameter if self.source else None

    @property
    def about(self) -> str | None:
        """Link to further details about this kind of error."""
        return self.links.about if self.links else None

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "kind": self.kind.value,
            "status": self.status,
            "code": self.code.value if self.code is not None else None,
            "service_code": self.service_code,
            "title": self.title,
            "detail": self.detail,
            "parameter": self.parameter,
            "about": self.about,
            "meta": self.meta,
        }


class CatalogError(Exception):
    """Raised by ``Result.unwrap()`` for a failed result."""

    def __init__(self, error: ApiError) -> None:
        message = error.detail or error.title or f"{error.kind.value} error"
        super().__init__(message)
        self.message = message
        self.error = error

    @property
    def status(self) -> str | None:
        return self.error.status

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {"error": self.message, **self.error.to_dict()}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self.error.kind.value!r}, "
            f"status={self.error.status!r}, message={self.message!r})"
        )
