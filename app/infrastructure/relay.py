"""Assembly of the relay components from settings."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field

from app.application.ports import ChangeFeedStore, PushTransport
from app.application.use_cases import ChangeFeedWatcher, DispatchEngine, ListenerRegistry
from app.config import Settings
from app.domain.entities import BootEpoch
from app.infrastructure.change_feed import InMemoryChangeFeed
from app.infrastructure.error_reporting import ErrorReporter
from app.infrastructure.push import DryRunPushTransport, PushProvider
from app.infrastructure.repositories import DeliveryLedger, TokenRegistry

logger = logging.getLogger(__name__)


@dataclass
class Relay:
    """Running set of relay components sharing one boot epoch."""

    epoch: BootEpoch
    store: ChangeFeedStore
    token_registry: TokenRegistry
    push_provider: PushProvider
    ledger: DeliveryLedger
    listener_registry: ListenerRegistry
    engine: DispatchEngine
    watcher: ChangeFeedWatcher
    reporter: ErrorReporter
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the watcher on the running event loop."""

        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self.watcher.run(), name="change-feed-watcher")
        logger.info(
            "Relay started; listening for records from %s",
            self.epoch.started_at.isoformat(),
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Relay stopped")

    def uptime_seconds(self) -> int:
        return self.epoch.uptime_seconds()


def build_relay(
    settings: Settings,
    *,
    store: ChangeFeedStore | None = None,
    transport: PushTransport | None = None,
    epoch: BootEpoch | None = None,
) -> Relay:
    """Wire the relay for ``settings``.

    ``store`` and ``transport`` override the configured backends.
    """

    epoch = epoch or BootEpoch.capture()
    store = store or _build_store(settings)
    transport = transport or _build_transport(settings)

    token_registry = TokenRegistry(store)
    push_provider = PushProvider(
        transport,
        token_registry,
        icon=settings.push_icon_url,
        badge=settings.push_badge_url,
        link=settings.push_click_link,
    )
    ledger = DeliveryLedger(store)
    engine = DispatchEngine(
        token_registry,
        push_provider,
        ledger,
        retry_attempts=settings.push_retry_attempts,
        retry_backoff_seconds=settings.push_retry_backoff_seconds,
    )
    listener_registry = ListenerRegistry()
    reporter = ErrorReporter()
    watcher = ChangeFeedWatcher(
        store, engine, listener_registry, epoch, reporter=reporter
    )
    return Relay(
        epoch=epoch,
        store=store,
        token_registry=token_registry,
        push_provider=push_provider,
        ledger=ledger,
        listener_registry=listener_registry,
        engine=engine,
        watcher=watcher,
        reporter=reporter,
    )


def _build_store(settings: Settings) -> ChangeFeedStore:
    if settings.change_feed_backend == "memory":
        logger.warning("Using the in-memory change feed; only records written in-process are relayed")
        return InMemoryChangeFeed()

    from app.infrastructure.change_feed.firebase import FirebaseChangeFeed
    from app.infrastructure.firebase import initialize_firebase_app

    return FirebaseChangeFeed(initialize_firebase_app(settings))


def _build_transport(settings: Settings) -> PushTransport:
    if settings.push_backend == "dry_run":
        return DryRunPushTransport()

    from app.infrastructure.firebase import initialize_firebase_app
    from app.infrastructure.push.fcm import FcmPushTransport

    return FcmPushTransport(initialize_firebase_app(settings))


__all__ = ["Relay", "build_relay"]
