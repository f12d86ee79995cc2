"""Tests for the Realtime Database change feed."""

from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, Callable

import anyio
import pytest

pytest.importorskip("firebase_admin")

from app.application.ports import ChildEvent
from app.infrastructure.change_feed import firebase as firebase_feed


class FakeRegistration:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeDatabase:
    """Stands in for ``firebase_admin.db`` with listeners fired from threads."""

    def __init__(self) -> None:
        self.listeners: dict[str, Callable[[Any], None]] = {}
        self.registrations: list[FakeRegistration] = []

    def reference(self, path: str, app: Any = None) -> "FakeReference":
        return FakeReference(self, path)

    def fire(self, path: str, *events: tuple[str, str, Any]) -> None:
        """Deliver ``events`` to the listener on ``path`` from a separate thread."""

        callback = self.listeners[path]

        def run() -> None:
            for event_type, event_path, data in events:
                callback(
                    SimpleNamespace(event_type=event_type, path=event_path, data=data)
                )

        thread = threading.Thread(target=run)
        thread.start()
        thread.join()


class FakeReference:
    def __init__(self, database: FakeDatabase, path: str) -> None:
        self._database = database
        self.path = path

    def get(self) -> Any:
        return None

    def listen(self, callback: Callable[[Any], None]) -> FakeRegistration:
        registration = FakeRegistration()
        self._database.listeners[self.path] = callback
        self._database.registrations.append(registration)
        return registration


@pytest.fixture
def fake_database(monkeypatch) -> FakeDatabase:
    database = FakeDatabase()
    monkeypatch.setattr(firebase_feed, "db", database)
    return database


@pytest.mark.anyio
async def test_listener_thread_events_reach_the_subscriber(fake_database) -> None:
    """Only children created after the lower bound are streamed, once each."""

    feed = firebase_feed.FirebaseChangeFeed()
    received: list[ChildEvent] = []

    async def consume() -> None:
        async for event in feed.subscribe(
            "notifications/U", order_by="time", start_at=10
        ):
            received.append(event)

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(consume)
        with anyio.fail_after(2):
            while "/notifications/U" not in fake_database.listeners:
                await anyio.sleep(0.01)

        await anyio.to_thread.run_sync(
            fake_database.fire,
            "/notifications/U",
            ("put", "/", {"old": {"time": 5, "msg": "before boot"}}),
            ("put", "/new", {"time": 11, "msg": "hello"}),
            ("patch", "/new", {"pushed": True}),
        )

        with anyio.fail_after(2):
            while not received:
                await anyio.sleep(0.01)
        await anyio.sleep(0.05)
        task_group.cancel_scope.cancel()

    assert [(event.key, event.path) for event in received] == [
        ("new", "notifications/U/new")
    ]
    assert received[0].value == {"time": 11, "msg": "hello"}


@pytest.mark.anyio
async def test_cancelled_subscription_closes_the_listener(fake_database) -> None:
    """Stopping the consumer closes the SDK listener registration."""

    feed = firebase_feed.FirebaseChangeFeed()

    async def consume() -> None:
        async for _ in feed.subscribe("messages"):
            pass

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(consume)
        with anyio.fail_after(2):
            while "/messages" not in fake_database.listeners:
                await anyio.sleep(0.01)
        task_group.cancel_scope.cancel()

    assert [registration.closed for registration in fake_database.registrations] == [
        True
    ]
