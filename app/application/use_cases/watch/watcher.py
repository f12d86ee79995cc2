"""Subscription loops feeding new records to the dispatch engine."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

import anyio
from anyio.abc import TaskGroup

from app.application.ports import ChangeFeedStore, ChildEvent, join_path
from app.domain.entities import (
    BootEpoch,
    DispatchStatus,
    RelayRecord,
    parse_message,
    parse_notification,
)
from app.infrastructure.error_reporting import ErrorReporter

from ..dispatch import DispatchEngine
from .listener_registry import ListenerRegistry

logger = logging.getLogger(__name__)

NOTIFICATIONS_PATH = "notifications"
MESSAGES_PATH = "messages"
NOTIFICATION_TIME_FIELD = "time"
MESSAGE_TIME_FIELD = "timestamp"


class ChangeFeedWatcher:
    """Watch the notification and message feeds for records created after boot.

    Notifications are watched in two levels: one subscription discovers owner
    scopes under the notifications root and each newly discovered owner gets
    its own ranged subscription, attached at most once per process through
    the :class:`ListenerRegistry`. Every qualifying record is dispatched in
    its own task so a failing record never stops a subscription loop.
    """

    def __init__(
        self,
        store: ChangeFeedStore,
        engine: DispatchEngine,
        registry: ListenerRegistry,
        epoch: BootEpoch,
        *,
        reporter: ErrorReporter | None = None,
        notifications_path: str = NOTIFICATIONS_PATH,
        messages_path: str = MESSAGES_PATH,
    ) -> None:
        self._store = store
        self._engine = engine
        self._registry = registry
        self._epoch = epoch
        self._reporter = reporter or ErrorReporter()
        self._notifications_path = notifications_path
        self._messages_path = messages_path

    async def run(self) -> None:
        """Run every subscription until cancelled."""

        logger.info(
            "Listening for records created after %s", self._epoch.started_at.isoformat()
        )
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(
                self._guard, "watching notification owners", self._watch_owners, task_group
            )
            task_group.start_soon(
                self._guard, "watching direct messages", self._watch_messages, task_group
            )

    def attach_owner(self, task_group: TaskGroup, owner_id: str) -> bool:
        """Start the notification subscription of ``owner_id`` unless one exists."""

        if not self._registry.claim(owner_id):
            logger.debug("Notification watcher already attached for %s", owner_id)
            return False

        task_group.start_soon(
            self._guard,
            f"watching notifications of {owner_id}",
            self._watch_owner_notifications,
            task_group,
            owner_id,
        )
        return True

    async def _watch_owners(self, task_group: TaskGroup) -> None:
        async for event in self._store.subscribe(self._notifications_path):
            self.attach_owner(task_group, event.key)

    async def _watch_owner_notifications(
        self, task_group: TaskGroup, owner_id: str
    ) -> None:
        path = join_path(self._notifications_path, owner_id)
        async for event in self._store.subscribe(
            path, order_by=NOTIFICATION_TIME_FIELD, start_at=self._epoch.millis
        ):
            record = parse_notification(owner_id, event.key, event.path, event.value)
            self._spawn(task_group, record, event)

    async def _watch_messages(self, task_group: TaskGroup) -> None:
        async for event in self._store.subscribe(
            self._messages_path,
            order_by=MESSAGE_TIME_FIELD,
            start_at=self._epoch.millis,
        ):
            record = parse_message(event.key, event.path, event.value)
            self._spawn(task_group, record, event)

    def _spawn(
        self, task_group: TaskGroup, record: RelayRecord | None, event: ChildEvent
    ) -> None:
        if record is None:
            logger.debug("Skipping malformed record at %s", event.path)
            return
        task_group.start_soon(self._handle, record)

    async def _handle(self, record: RelayRecord) -> None:
        try:
            result = await self._engine.dispatch(record)
        except Exception as exc:
            self._reporter.report_exception(f"dispatching {record.path}", exc)
            return
        if result.status is DispatchStatus.FAILED:
            self._reporter.report_failure(record.path, result)

    async def _guard(
        self, context: str, func: Callable[..., Awaitable[Any]], *args: Any
    ) -> None:
        try:
            await func(*args)
        except Exception as exc:
            self._reporter.report_exception(context, exc)


__all__ = [
    "ChangeFeedWatcher",
    "MESSAGES_PATH",
    "MESSAGE_TIME_FIELD",
    "NOTIFICATIONS_PATH",
    "NOTIFICATION_TIME_FIELD",
]
