"""Tests for child-created tracking and the in-memory change feed."""

from __future__ import annotations

import anyio
import pytest

from app.application.ports import ChildEvent
from app.infrastructure.change_feed import ChildTracker, InMemoryChangeFeed, matches_range


def test_initial_snapshot_reports_every_child() -> None:
    tracker = ChildTracker("messages")

    events = tracker.observe("put", "/", {"a": {"text": "1"}, "b": {"text": "2"}})

    assert events == [
        ChildEvent(key="a", value={"text": "1"}, path="messages/a"),
        ChildEvent(key="b", value={"text": "2"}, path="messages/b"),
    ]


def test_updates_to_known_children_are_ignored() -> None:
    tracker = ChildTracker("messages")
    tracker.observe("put", "/", {"a": {"text": "1"}})

    assert tracker.observe("patch", "/a", {"pushed": True}) == []
    assert tracker.observe("put", "/a/pushed", True) == []
    assert tracker.observe("put", "/a", {"text": "edited"}) == []


def test_nested_write_to_new_child_fetches_it() -> None:
    fetched: list[str] = []

    def fetch(key: str):
        fetched.append(key)
        return {"n1": {"time": 5}}

    tracker = ChildTracker("notifications", fetch=fetch)

    events = tracker.observe("put", "/U/n1", {"time": 5})

    assert fetched == ["U"]
    assert [event.key for event in events] == ["U"]
    assert tracker.observe("put", "/U/n2", {"time": 6}) == []


def test_patch_at_root_creates_children() -> None:
    tracker = ChildTracker("users", fetch=lambda key: {"name": key})

    events = tracker.observe("patch", "/", {"A": {"name": "Ana"}, "B/name": "Bea"})

    assert [(event.key, event.value) for event in events] == [
        ("A", {"name": "Ana"}),
        ("B", {"name": "B"}),
    ]


def test_deleted_child_is_reported_again_when_recreated() -> None:
    tracker = ChildTracker("messages")
    tracker.observe("put", "/a", {"text": "1"})

    assert tracker.observe("put", "/a", None) == []
    assert "a" not in tracker.seen
    assert len(tracker.observe("put", "/a", {"text": "again"})) == 1


def test_range_filter_excludes_children_before_lower_bound() -> None:
    tracker = ChildTracker("messages", order_by="timestamp", start_at=100)

    events = tracker.observe(
        "put",
        "/",
        {
            "old": {"timestamp": 99},
            "edge": {"timestamp": 100},
            "new": {"timestamp": 101.5},
            "missing": {"text": "no timestamp"},
            "text": {"timestamp": "later"},
        },
    )

    assert [event.key for event in events] == ["edge", "new"]
    assert tracker.observe("patch", "/old", {"timestamp": 500}) == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"time": 10}, True),
        ({"time": 9}, False),
        ({"time": True}, False),
        ({"time": None}, False),
        ("scalar", False),
    ],
)
def test_matches_range(value, expected) -> None:
    assert matches_range(value, "time", 10) is expected


def test_matches_range_without_order_accepts_anything() -> None:
    assert matches_range("scalar", None, None) is True


def test_memory_store_reads_and_updates_fields() -> None:
    store = InMemoryChangeFeed({"users": {"U": {"name": "Una", "fcmToken": "T1"}}})

    store.apply_update("users/U", {"fcmToken": None, "lastSeen": 3})

    assert store.read("users/U") == {"name": "Una", "lastSeen": 3}
    assert store.read("users/missing") is None
    assert store.read("users/U/name/deeper") is None


def test_memory_store_push_keys_sort_in_creation_order() -> None:
    store = InMemoryChangeFeed()

    first = store.push("messages", {"text": "1"})
    second = store.push("messages", {"text": "2"})

    assert first < second
    assert list(store.read("messages")) == [first, second]


@pytest.mark.anyio
async def test_memory_subscription_streams_new_children() -> None:
    store = InMemoryChangeFeed({"messages": {"old": {"timestamp": 1}}})
    received: list[ChildEvent] = []

    async def consume() -> None:
        async for event in store.subscribe("messages", order_by="timestamp", start_at=10):
            received.append(event)

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(consume)
        with anyio.fail_after(2):
            while store.subscriber_count("messages") == 0:
                await anyio.sleep(0.01)

        store.set("messages/late", {"timestamp": 5})
        key = store.push("messages", {"timestamp": 11, "text": "hi"})
        await store.update(f"messages/{key}", {"pushed": True})

        with anyio.fail_after(2):
            while not received:
                await anyio.sleep(0.01)
        await anyio.sleep(0.05)
        task_group.cancel_scope.cancel()

    assert received == [
        ChildEvent(key=key, value={"timestamp": 11, "text": "hi"}, path=f"messages/{key}")
    ]
    assert store.subscriber_count("messages") == 0
