"""Pydantic models for Music Catalog SDK.

Frozen value objects for the fetch pipeline and the JSON:API response
envelope shared by every resource type.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import ApiError
from .types import AuthMode


class TokenPair(BaseModel):
    """Tokens produced for a single fetch."""

    model_config = ConfigDict(frozen=True)

    service_token: str | None = None
    user_token: str | None = None

    def is_complete_for(self, mode: AuthMode) -> bool:
        """Check the pair carries every token the mode requires."""
        if not self.service_token:
            return False
        if mode == AuthMode.USER:
            return bool(self.user_token)
        return True


class RequestDescriptor(BaseModel):
    """Fully-qualified GET request, one per network call."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)


class CatalogModel(BaseModel):
    """Base for wire models; accepts camelCase keys and ignores unknown ones."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Resource(CatalogModel):
    """A JSON:API resource object.

    Untyped by default; resource models narrow ``attributes`` and
    ``relationships`` to their own shapes.
    """

    id: str | None = None
    type: str | None = None
    href: str | None = None
    attributes: dict[str, Any] | None = None
    relationships: dict[str, Any] | None = None


ResourceT = TypeVar("ResourceT", bound=BaseModel)


class Relationship(CatalogModel, Generic[ResourceT]):
    """A relationship to other resources."""

    data: list[ResourceT] = Field(default_factory=list)
    href: str | None = None
    next: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class Envelope(CatalogModel, Generic[ResourceT]):
    """Response wrapper: data, errors and pagination links."""

    data: list[ResourceT] = Field(default_factory=list)
    errors: list[ApiError] = Field(default_factory=list)
    href: str | None = None
    next: str | None = None

    @field_validator("data", "errors", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def first(self) -> ResourceT | None:
        """First data item, if any."""
        return self.data[0] if self.data else None

    @property
    def first_error(self) -> ApiError | None:
        """First error, if any."""
        return self.errors[0] if self.errors else None
