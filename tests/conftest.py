"""Shared fixtures for the relay test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import anyio
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.ports import PushTransport
from app.config import Settings
from app.domain.entities import BootEpoch, PushMessage, PushResult
from app.infrastructure.change_feed import InMemoryChangeFeed
from app.infrastructure.relay import Relay, build_relay

BOOT_MILLIS = 1_700_000_000_000


class FakePushTransport(PushTransport):
    """Push transport that records messages in memory for test assertions."""

    def __init__(self) -> None:
        self.sent: list[PushMessage] = []
        self.queued_results: list[PushResult] = []
        self.error: Exception | None = None

    def configure(self, *results: PushResult, error: Exception | None = None) -> None:
        """Queue the results returned by the next sends, or an error to raise."""

        self.queued_results.extend(results)
        self.error = error

    async def send(self, message: PushMessage) -> PushResult:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        if self.queued_results:
            return self.queued_results.pop(0)
        return PushResult.sent(f"push-{len(self.sent)}")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        change_feed_backend="memory",
        push_backend="dry_run",
        firebase_service_account=None,
        firebase_database_url=None,
        keepalive_url=None,
        relay_autostart=False,
    )


@pytest.fixture
def epoch() -> BootEpoch:
    return BootEpoch(millis=BOOT_MILLIS, monotonic=0.0)


@pytest.fixture
def store() -> InMemoryChangeFeed:
    return InMemoryChangeFeed()


@pytest.fixture
def transport() -> FakePushTransport:
    return FakePushTransport()


@pytest.fixture
def relay(settings, store, transport, epoch) -> Relay:
    return build_relay(settings, store=store, transport=transport, epoch=epoch)


async def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    with anyio.fail_after(timeout):
        while not predicate():
            await anyio.sleep(0.01)


@pytest.fixture
def wait_until():
    """Return a coroutine function that yields to the loop until a predicate holds."""

    return _wait_until
