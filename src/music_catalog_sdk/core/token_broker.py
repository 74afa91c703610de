"""Token acquisition for Music Catalog SDK.

Obtains a service token from the configured token server and, for
user-scoped requests, exchanges it for a device-bound user token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import httpx

from ..models import TokenPair
from ..telemetry import get_logger, trace_operation
from ..types import AuthMode, Result
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..config import CatalogConfig


class UserTokenExchange(Protocol):
    """Device capability that turns a service token into a user token."""

    async def request_user_token(self, service_token: str) -> str | None:
        """Exchange once; return None when no user token is granted."""
        ...


class TokenSource(Protocol):
    """Anything that can produce a token pair for an auth mode."""

    async def acquire(self, mode: AuthMode) -> Result[TokenPair]:
        ...


class TokenBroker:
    """Acquires a fresh token pair per call. Nothing is cached."""

    def __init__(
        self,
        config: CatalogConfig,
        client: httpx.AsyncClient,
        user_token_exchange: UserTokenExchange | None = None,
    ) -> None:
        """Initialize token broker.

        Args:
            config: SDK configuration.
            client: HTTP client used for the token server call.
            user_token_exchange: Optional device exchange for user tokens.
        """
        self.config = config
        self._client = client
        self._user_token_exchange = user_token_exchange
        self._logger = get_logger()

    async def acquire(self, mode: AuthMode) -> Result[TokenPair]:
        """Produce the token pair for ``mode``.

        Fails only when token configuration is missing; a token server or
        exchange that yields nothing gives a pair with ``None`` members.
        """
        if not self.config.has_token_configuration:
            self._logger.error(
                "Missing token information for 'teamID'/'keyID'/'tokenServer'"
            )
            return Result.failure(ErrorFactory.missing_configuration())

        with trace_operation("acquire_tokens", attributes={"auth.mode": mode.value}):
            service_token = await self.request_service_token()
            if mode == AuthMode.SERVICE:
                return Result.success(TokenPair(service_token=service_token))

            user_token = None
            if service_token is not None:
                user_token = await self.request_user_token(service_token)
            return Result.success(
                TokenPair(service_token=service_token, user_token=user_token)
            )

    def build_token_request(self) -> dict[str, Any]:
        """Build the token server payload."""
        return {"kid": self.config.key_id, "tid": self.config.team_id}

    async def request_service_token(self) -> str | None:
        """POST to the token server once and read its ``token`` field."""
        try:
            response = await self._client.post(
                self.config.token_server or "",
                json=self.build_token_request(),
            )
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            self._logger.warning("Token server request failed", error=str(e))
            return None

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            self._logger.warning(
                "Token server returned no token", status=response.status_code
            )
            return None
        return token

    async def request_user_token(self, service_token: str) -> str | None:
        """Exchange the service token for a user token once."""
        if self._user_token_exchange is None:
            self._logger.warning("No user token exchange configured")
            return None
        try:
            return await self._user_token_exchange.request_user_token(service_token)
        except Exception as e:
            self._logger.warning("User token exchange failed", error=str(e))
            return None
