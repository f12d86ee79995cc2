"""Push transport that only logs what would have been sent."""

from __future__ import annotations

import logging
from uuid import uuid4

from app.application.ports import PushTransport
from app.domain.entities import PushMessage, PushResult

logger = logging.getLogger(__name__)


class DryRunPushTransport(PushTransport):
    """Accept every push without contacting a provider."""

    async def send(self, message: PushMessage) -> PushResult:
        logger.info(
            "Dry run push to %s... | %s | %s", message.token[:8], message.title, message.body
        )
        return PushResult.sent(f"dry-run-{uuid4().hex[:12]}")


__all__ = ["DryRunPushTransport"]
