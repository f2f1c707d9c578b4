"""
Read-through cache for the remote allow-list.

States:
    EMPTY  - never populated; ``get()`` refreshes and falls back to an empty set
    FRESH  - populated within the TTL; ``get()`` serves the cached set
    STALE  - populated but expired; ``get()`` refreshes and falls back to the
             old set if the refresh fails

Refresh failures are logged and never propagated. Concurrent refreshes are
not deduplicated; the last successful one wins.
"""
from __future__ import annotations

import enum
import logging
import time
from typing import Any, Callable, FrozenSet, Optional

import httpx

from registry.core.config import settings
from registry.core.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


class CacheState(str, enum.Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


def parse_allowlist(payload: Any) -> FrozenSet[str]:
    """Normalize an upstream payload into a set of lowercase addresses.

    Each entry is either a plain address string or an object exposing an
    ``address`` field.
    """

    if not isinstance(payload, list):
        raise UpstreamUnavailable("Allow-list payload is not a list")

    addresses = set()
    for entry in payload:
        if isinstance(entry, dict):
            entry = entry.get("address")
        if not isinstance(entry, str) or not entry:
            raise UpstreamUnavailable(f"Malformed allow-list entry: {entry!r}")
        addresses.add(entry.strip().lower())
    return frozenset(addresses)


class AllowlistCache:
    """TTL cache in front of the allow-list service."""

    def __init__(
        self,
        url: Optional[str] = None,
        ttl: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url or settings.allowlist.url
        self.ttl = ttl if ttl is not None else settings.allowlist.ttl_seconds
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.allowlist.timeout_seconds,
            transport=transport,
        )
        self._clock = clock
        self._addresses: Optional[FrozenSet[str]] = None
        self._refreshed_at: float = 0.0

    @property
    def state(self) -> CacheState:
        if self._addresses is None:
            return CacheState.EMPTY
        if self._clock() - self._refreshed_at < self.ttl:
            return CacheState.FRESH
        return CacheState.STALE

    async def get(self) -> FrozenSet[str]:
        if self.state is CacheState.FRESH:
            logger.debug("Allow-list cache hit")
            return self._addresses

        logger.debug(f"Allow-list cache {self.state.value}, refreshing from {self.url}")
        try:
            addresses = await self._fetch()
        except UpstreamUnavailable as exc:
            logger.error(f"Allow-list fetch failed: {exc.message}")
            return self._addresses if self._addresses is not None else frozenset()

        self._addresses = addresses
        self._refreshed_at = self._clock()
        logger.info(f"Allow-list refreshed with {len(addresses)} addresses")
        return addresses

    async def _fetch(self) -> FrozenSet[str]:
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise UpstreamUnavailable(str(exc) or exc.__class__.__name__) from exc
        return parse_allowlist(payload)

    async def aclose(self) -> None:
        await self._client.aclose()
