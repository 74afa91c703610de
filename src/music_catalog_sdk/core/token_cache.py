"""Token caching decorator for Music Catalog SDK.

Wraps any token source and reuses a complete token pair until it nears
expiry. The broker itself stays stateless.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import jwt

from ..telemetry import get_logger
from ..types import AuthMode, Result

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..config import TokenCacheConfig
    from ..models import TokenPair
    from .token_broker import TokenSource


def token_expiry(token: str) -> float | None:
    """Read the ``exp`` claim of a JWT without verifying it.

    Returns None for tokens that are not JWTs or carry no numeric ``exp``.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.exceptions.DecodeError:
        return None
    exp = claims.get("exp")
    return float(exp) if isinstance(exp, int | float) else None


class CachingTokenBroker:
    """Caches token pairs per auth mode in front of another token source."""

    def __init__(
        self,
        inner: TokenSource,
        config: TokenCacheConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize caching broker.

        Args:
            inner: Token source to delegate to on a miss.
            config: Cache settings.
            clock: Time source, in seconds since the epoch.
        """
        self._inner = inner
        self._config = config
        self._clock = clock
        self._entries: dict[AuthMode, tuple[TokenPair, float]] = {}
        self._lock = asyncio.Lock()
        self._logger = get_logger()

    async def acquire(self, mode: AuthMode) -> Result[TokenPair]:
        """Return a cached pair while fresh, otherwise acquire a new one."""
        async with self._lock:
            cached = self._lookup(mode)
            if cached is not None:
                return Result.success(cached)

            result = await self._inner.acquire(mode)
            if result.ok and result.value is not None and result.value.is_complete_for(mode):
                self._entries[mode] = (result.value, self._expires_at(result.value))
            return result

    def invalidate(self, mode: AuthMode | None = None) -> None:
        """Drop the cached pair for ``mode``, or every pair."""
        if mode is None:
            self._entries.clear()
        else:
            self._entries.pop(mode, None)

    def _lookup(self, mode: AuthMode) -> TokenPair | None:
        entry = self._entries.get(mode)
        if entry is None:
            return None
        pair, expires_at = entry
        if self._clock() >= expires_at - self._config.expiry_buffer:
            self._logger.debug("Cached token expired", mode=mode.value)
            del self._entries[mode]
            return None
        return pair

    def _expires_at(self, pair: TokenPair) -> float:
        now = self._clock()
        default = now + self._config.ttl_seconds
        exp = token_expiry(pair.service_token or "")
        return min(exp, default) if exp is not None else default
