"""In-process change feed store backed by a nested dictionary."""

from __future__ import annotations

import copy
import itertools
import math
from dataclasses import dataclass
from typing import Any, AsyncIterator, Mapping

import anyio
from anyio.streams.memory import MemoryObjectSendStream

from app.application.ports import ChangeFeedStore, ChildEvent, join_path

from .tracker import ChildTracker


@dataclass
class _Subscription:
    path: str
    tracker: ChildTracker
    stream: MemoryObjectSendStream


class InMemoryChangeFeed(ChangeFeedStore):
    """Change feed with the same child-created semantics as the database.

    Writes made through :meth:`set`, :meth:`push` and :meth:`update` are
    reported to every open subscription whose path they touch.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))
        self._subscriptions: list[_Subscription] = []
        self._key_sequence = itertools.count(1)

    async def subscribe(
        self,
        path: str,
        *,
        order_by: str | None = None,
        start_at: float | None = None,
    ) -> AsyncIterator[ChildEvent]:
        path = join_path(path)
        tracker = ChildTracker(
            path,
            order_by=order_by,
            start_at=start_at,
            fetch=lambda key: self.read(join_path(path, key)),
        )
        send, receive = anyio.create_memory_object_stream(math.inf)
        subscription = _Subscription(path=path, tracker=tracker, stream=send)
        self._subscriptions.append(subscription)
        for event in tracker.observe("put", "/", self.read(path)):
            send.send_nowait(event)

        try:
            async with receive:
                async for event in receive:
                    yield event
        finally:
            self._subscriptions.remove(subscription)
            send.close()

    async def get(self, path: str) -> Any:
        return self.read(path)

    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        self.apply_update(path, values)

    def read(self, path: str) -> Any:
        node: Any = self._data
        for segment in _segments(path):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    def set(self, path: str, value: Any) -> None:
        path = join_path(path)
        self._write(path, copy.deepcopy(value))
        self._broadcast("put", path, value)

    def push(self, path: str, value: Any) -> str:
        """Store ``value`` under a new, increasing child key of ``path``."""

        key = f"-k{next(self._key_sequence):08d}"
        self.set(join_path(path, key), value)
        return key

    def apply_update(self, path: str, values: Mapping[str, Any]) -> None:
        path = join_path(path)
        for key, value in values.items():
            self._write(join_path(path, key), copy.deepcopy(value))
        self._broadcast("patch", path, dict(values))

    def subscriber_count(self, path: str) -> int:
        path = join_path(path)
        return sum(1 for subscription in self._subscriptions if subscription.path == path)

    def _write(self, path: str, value: Any) -> None:
        segments = _segments(path)
        if not segments:
            self._data = value if isinstance(value, dict) else {}
            return

        node = self._data
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[segment] = child
            node = child

        if value is None:
            node.pop(segments[-1], None)
        else:
            node[segments[-1]] = value

    def _broadcast(self, event_type: str, path: str, data: Any) -> None:
        for subscription in list(self._subscriptions):
            relative = _relative_path(subscription.path, path)
            if relative is not None:
                events = subscription.tracker.observe(
                    event_type, relative, copy.deepcopy(data)
                )
            elif _relative_path(path, subscription.path) is not None:
                # A write above the subscription replaces the watched node.
                events = subscription.tracker.observe(
                    "put", "/", self.read(subscription.path)
                )
            else:
                continue
            for event in events:
                subscription.stream.send_nowait(event)


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _relative_path(base: str, path: str) -> str | None:
    """Return ``path`` relative to ``base`` or ``None`` when outside it."""

    base_segments = _segments(base)
    segments = _segments(path)
    if segments[: len(base_segments)] != base_segments:
        return None
    return "/" + "/".join(segments[len(base_segments):])


__all__ = ["InMemoryChangeFeed"]
