"""Periodic self ping that keeps free-tier hosts from idling the process."""

from __future__ import annotations

import logging
from typing import Callable

import anyio
import httpx

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_DELAY_SECONDS = 5.0


class KeepAlivePinger:
    """Call ``<base_url>/ping`` on a fixed interval."""

    def __init__(
        self,
        base_url: str,
        *,
        interval_seconds: float,
        initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS,
        client_factory: Callable[[], httpx.AsyncClient] = httpx.AsyncClient,
    ) -> None:
        self._url = base_url.rstrip("/") + "/ping"
        self._interval = interval_seconds
        self._initial_delay = initial_delay_seconds
        self._client_factory = client_factory

    @property
    def url(self) -> str:
        return self._url

    async def ping_once(self) -> int | None:
        """Ping once and return the status code, or ``None`` on failure."""

        try:
            async with self._client_factory() as client:
                response = await client.get(self._url, timeout=10.0)
        except httpx.HTTPError as exc:
            logger.error("Keepalive ping failed: %s", exc)
            return None

        logger.info("Keepalive pinged self, status: %s", response.status_code)
        return response.status_code

    async def run(self) -> None:
        await anyio.sleep(self._initial_delay)
        while True:
            await self.ping_once()
            await anyio.sleep(self._interval)


__all__ = ["KeepAlivePinger"]
