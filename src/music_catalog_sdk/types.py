"""Type definitions for Music Catalog SDK."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .errors import ApiError

T = TypeVar("T")


class AuthMode(StrEnum):
    """Credential tier a fetch requires."""

    SERVICE = "service"
    USER = "user"


class Verbosity(StrEnum):
    """Console verbosity of the SDK logger."""

    SILENT = "silent"
    VERBOSE = "verbose"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a pipeline step: either a value or an ApiError."""

    value: T | None = None
    error: ApiError | None = None

    @classmethod
    def success(cls, value: T | None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the value or raise CatalogError for a failed result."""
        if self.error is not None:
            from .errors import CatalogError

            raise CatalogError(self.error)
        return self.value
