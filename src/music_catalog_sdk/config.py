"""Configuration for Music Catalog SDK.

Uses Pydantic v2 for validation. A ``CatalogConfig`` is built once at
start-up and shared read-only by every component of the fetch pipeline.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from .types import AuthMode, Verbosity


class TelemetryConfig(BaseModel):
    """Logging and OpenTelemetry configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "music-catalog-sdk"
    verbosity: Verbosity = Verbosity.SILENT
    trace_requests: bool = True

    @property
    def log_level(self) -> int:
        """Log level implied by the verbosity setting."""
        return logging.DEBUG if self.verbosity == Verbosity.VERBOSE else logging.CRITICAL


class TokenCacheConfig(BaseModel):
    """Settings for the optional token-caching decorator."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    ttl_seconds: Annotated[int, Field(gt=0)] = 1800  # 30 minutes
    expiry_buffer: Annotated[int, Field(ge=0)] = 60  # 1 minute before expiry


class CatalogConfig(BaseModel):
    """Main configuration for Music Catalog SDK."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # Token issuing; checked when a token is acquired, not here
    key_id: str | None = None
    team_id: str | None = None
    token_server: str | None = None

    # Service
    base_url: HttpUrl = "https://api.music.apple.com"  # type: ignore[assignment]
    auth_mode: AuthMode = AuthMode.SERVICE
    user_token_header: str = Field(default="Music-User-Token", min_length=1)

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0

    # Sub-configurations
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    token_cache: TokenCacheConfig = Field(default_factory=TokenCacheConfig)

    @field_validator("key_id", "team_id", "token_server")
    @classmethod
    def blank_as_missing(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only credentials as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_token_configuration(self) -> bool:
        """Whether key id, team id and token server are all present."""
        return all((self.key_id, self.team_id, self.token_server))

    @property
    def base_url_str(self) -> str:
        """Get base URL as string without trailing slash."""
        return str(self.base_url).rstrip("/")

    def resolve_url(self, resource_path: str) -> str:
        """Join a service-relative resource path to the base URL.

        Absolute http(s) URLs are returned unchanged.
        """
        if resource_path.startswith(("http://", "https://")):
            return resource_path
        return f"{self.base_url_str}/{resource_path.lstrip('/')}"

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "MUSIC_CATALOG_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        kwargs: dict[str, Any] = {
            "key_id": get_env("KEY_ID"),
            "team_id": get_env("TEAM_ID"),
            "token_server": get_env("TOKEN_SERVER"),
            "auth_mode": AuthMode(get_env("AUTH_MODE", AuthMode.SERVICE.value).lower()),
            "timeout": float(get_env("TIMEOUT", "30.0")),
            "telemetry": TelemetryConfig(
                verbosity=Verbosity(get_env("VERBOSITY", Verbosity.SILENT.value).lower())
            ),
        }
        base_url = get_env("BASE_URL")
        if base_url:
            kwargs["base_url"] = base_url

        return cls(**kwargs)
