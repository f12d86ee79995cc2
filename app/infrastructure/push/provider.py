"""Push delivery with outcome classification and stale token cleanup."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.application.ports import PushTransport
from app.domain.entities import (
    DEFAULT_VIBRATION_PROFILE,
    PushMessage,
    PushResult,
    VibrationProfile,
)
from app.infrastructure.repositories import TokenRegistry

logger = logging.getLogger(__name__)

DEFAULT_PUSH_TYPE = "system"


class PushProvider:
    """Send pushes through a transport and never let its errors escape."""

    def __init__(
        self,
        transport: PushTransport,
        token_registry: TokenRegistry,
        *,
        icon: str | None = None,
        badge: str | None = None,
        link: str = "/",
    ) -> None:
        self._transport = transport
        self._tokens = token_registry
        self._icon = icon
        self._badge = badge
        self._link = link

    async def send(
        self,
        token: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
        profile: VibrationProfile | None = None,
    ) -> bool:
        """Return ``True`` when the push was accepted by the provider."""

        result = await self.deliver(token, title, body, data, profile)
        return result.ok

    async def deliver(
        self,
        token: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
        profile: VibrationProfile | None = None,
    ) -> PushResult:
        """Send a push and return the classified :class:`PushResult`.

        Tokens reported as invalid or unregistered are removed from every
        profile holding them before returning.
        """

        # The transport only accepts string values in the data payload.
        metadata = {str(key): str(value) for key, value in (data or {}).items()}
        push_type = metadata.get("type") or DEFAULT_PUSH_TYPE
        message = PushMessage(
            token=token,
            title=title,
            body=body,
            data=metadata,
            profile=profile or DEFAULT_VIBRATION_PROFILE,
            icon=self._icon,
            badge=self._badge,
            link=self._link,
        )

        try:
            result = await self._transport.send(message)
        except Exception as exc:
            logger.exception("Push transport raised an unexpected error")
            result = PushResult.failed("unknown", str(exc))

        if result.ok:
            logger.info("Push sent | type: %s | title: %s", push_type, title)
            return result

        logger.error(
            "Push failed | code: %s | type: %s | detail: %s",
            result.error_code,
            push_type,
            result.detail,
        )
        if result.stale_token:
            await self._discard_token(token)
        return result

    async def _discard_token(self, token: str) -> None:
        try:
            await self._tokens.invalidate(token)
        except Exception:
            logger.exception("Could not remove stale push token")


__all__ = ["DEFAULT_PUSH_TYPE", "PushProvider"]
