"""Vexora — Best-effort reachability probe (single HEAD request, no retry)."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class ReachabilityProbe:
    """Any HTTP response counts as reachable; only transport errors fail."""

    def __init__(self, timeout: float = 5.0, client: httpx.AsyncClient | None = None) -> None:
        self.timeout = timeout
        self._client = client

    async def check(self, url: str) -> bool:
        try:
            if self._client is not None:
                await self._client.head(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    await client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            logger.warning("Reachability probe failed for %s: %s", url, exc)
            return False
        return True


class DisabledProbe:
    """Probe used when probing is switched off: every host is reachable."""

    async def check(self, url: str) -> bool:
        return True
