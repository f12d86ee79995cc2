"""Turn change feed records into push notifications."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

import anyio

from app.domain.entities import (
    DirectMessageRecord,
    DispatchResult,
    NotificationRecord,
    RelayRecord,
    VibrationProfile,
)
from app.infrastructure.push import PushProvider
from app.infrastructure.repositories import DeliveryLedger, TokenRegistry

from .payloads import (
    MESSAGE_TYPE,
    message_body,
    message_metadata,
    message_title,
    notification_body,
    notification_metadata,
    notification_title,
    vibration_profile_for,
)

logger = logging.getLogger(__name__)

SKIP_MISSING_RECORD = "missing_record"
SKIP_ALREADY_DELIVERED = "already_delivered"
SKIP_INCOMPLETE_RECORD = "incomplete_record"
SKIP_SELF_MESSAGE = "self_message"
SKIP_NO_RECIPIENT_TOKEN = "no_recipient_token"
FAIL_PUSH = "push_failed"
FAIL_TOKEN_INVALIDATED = "token_invalidated"


class DispatchEngine:
    """Resolve the recipient of a record, push to it and mark it delivered."""

    def __init__(
        self,
        token_registry: TokenRegistry,
        push_provider: PushProvider,
        ledger: DeliveryLedger,
        *,
        retry_attempts: int = 0,
        retry_backoff_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = anyio.sleep,
    ) -> None:
        self._tokens = token_registry
        self._push = push_provider
        self._ledger = ledger
        self._retry_attempts = max(0, retry_attempts)
        self._retry_backoff = retry_backoff_seconds
        self._sleep = sleep

    async def dispatch(self, record: RelayRecord) -> DispatchResult:
        if isinstance(record, DirectMessageRecord):
            return await self.handle_message(record)
        return await self.handle_notification(record)

    async def handle_notification(
        self, record: NotificationRecord | None
    ) -> DispatchResult:
        """Push a notification record to its owner."""

        if record is None:
            return DispatchResult.skipped(SKIP_MISSING_RECORD)
        if self._ledger.is_delivered(record):
            return self._skip(SKIP_ALREADY_DELIVERED, record.path)

        profile = await self._tokens.get_profile(record.owner_id)
        if profile is None or not profile.fcm_token:
            return self._skip(SKIP_NO_RECIPIENT_TOKEN, record.path)

        return await self._deliver(
            record,
            token=profile.fcm_token,
            title=notification_title(record.type),
            body=notification_body(record),
            data=notification_metadata(record),
            profile=vibration_profile_for(record.type),
        )

    async def handle_message(
        self, record: DirectMessageRecord | None
    ) -> DispatchResult:
        """Push a direct message to its recipient on behalf of the sender."""

        if record is None:
            return DispatchResult.skipped(SKIP_MISSING_RECORD)
        if not record.is_complete:
            return self._skip(SKIP_INCOMPLETE_RECORD, record.path)
        if self._ledger.is_delivered(record):
            return self._skip(SKIP_ALREADY_DELIVERED, record.path)
        if record.is_self_message:
            return self._skip(SKIP_SELF_MESSAGE, record.path)

        recipient = await self._tokens.get_profile(record.recipient_id)
        if recipient is None or not recipient.fcm_token:
            return self._skip(SKIP_NO_RECIPIENT_TOKEN, record.path)

        sender = await self._tokens.get_profile(record.sender_id)
        sender_name = sender.name if sender is not None else None

        return await self._deliver(
            record,
            token=recipient.fcm_token,
            title=message_title(sender_name),
            body=message_body(record),
            data=message_metadata(record),
            profile=vibration_profile_for(MESSAGE_TYPE),
        )

    async def _deliver(
        self,
        record: RelayRecord,
        *,
        token: str,
        title: str,
        body: str,
        data: dict[str, str],
        profile: VibrationProfile,
    ) -> DispatchResult:
        attempt = 0
        delay = self._retry_backoff
        while True:
            result = await self._push.deliver(token, title, body, data, profile)
            if result.ok:
                await self._ledger.mark_delivered(record)
                return DispatchResult.delivered(record.path)
            if result.stale_token:
                return DispatchResult.failed(FAIL_TOKEN_INVALIDATED, record.path)
            if attempt >= self._retry_attempts:
                return DispatchResult.failed(
                    f"{FAIL_PUSH}:{result.error_code or 'unknown'}", record.path
                )
            attempt += 1
            logger.warning(
                "Retrying push for %s in %.1fs (attempt %s of %s)",
                record.path,
                delay,
                attempt,
                self._retry_attempts,
            )
            await self._sleep(delay)
            delay *= 2

    @staticmethod
    def _skip(reason: str, record_path: str) -> DispatchResult:
        logger.debug("Skipping %s: %s", record_path, reason)
        return DispatchResult.skipped(reason, record_path)


__all__ = [
    "DispatchEngine",
    "FAIL_PUSH",
    "FAIL_TOKEN_INVALIDATED",
    "SKIP_ALREADY_DELIVERED",
    "SKIP_INCOMPLETE_RECORD",
    "SKIP_MISSING_RECORD",
    "SKIP_NO_RECIPIENT_TOKEN",
    "SKIP_SELF_MESSAGE",
]
