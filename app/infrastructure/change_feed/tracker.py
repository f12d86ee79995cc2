"""Derive child-created events from a stream of put/patch writes."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from app.application.ports import ChildEvent, join_path

logger = logging.getLogger(__name__)

_FETCH = object()


def matches_range(value: Any, order_by: str | None, start_at: float | None) -> bool:
    """Return whether ``value`` passes an ``order_by >= start_at`` filter.

    Children without a numeric ``order_by`` field never match a ranged
    subscription.
    """

    if order_by is None:
        return True
    if not isinstance(value, Mapping):
        return False
    field = value.get(order_by)
    if isinstance(field, bool) or not isinstance(field, (int, float)):
        return False
    return start_at is None or field >= start_at


class ChildTracker:
    """Track which children of ``path`` have been seen.

    ``observe`` receives the writes reported for ``path`` (relative paths,
    ``/`` meaning the node itself) and returns an event for every child that
    appears for the first time and passes the range filter. Writes below an
    already-seen child are updates and are ignored. When a child first shows
    up through a nested write, ``fetch`` is used to read it in full.
    """

    def __init__(
        self,
        path: str,
        *,
        order_by: str | None = None,
        start_at: float | None = None,
        fetch: Callable[[str], Any] | None = None,
    ) -> None:
        self.path = join_path(path)
        self.order_by = order_by
        self.start_at = start_at
        self._fetch = fetch
        # Grows with every live child for the life of the subscription.
        self._seen: set[str] = set()

    def observe(self, event_type: str, path: str, data: Any) -> list[ChildEvent]:
        if event_type not in ("put", "patch"):
            return []

        segments = [segment for segment in path.split("/") if segment]
        if not segments:
            if event_type == "put":
                children = data if isinstance(data, Mapping) else {}
                self._seen.intersection_update(str(key) for key in children)
                writes: Iterable[tuple[str, Any]] = (
                    (str(key), value) for key, value in children.items()
                )
            else:
                writes = self._patch_writes(data)
        elif len(segments) == 1 and event_type == "put":
            writes = [(segments[0], data)]
        else:
            writes = [(segments[0], _FETCH)]

        events = []
        for key, value in list(writes):
            event = self._created(key, value)
            if event is not None:
                events.append(event)
        return events

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self._seen)

    @staticmethod
    def _patch_writes(data: Any) -> list[tuple[str, Any]]:
        if not isinstance(data, Mapping):
            return []
        writes = []
        for raw_key, value in data.items():
            segments = [segment for segment in str(raw_key).split("/") if segment]
            if not segments:
                continue
            if len(segments) == 1:
                writes.append((segments[0], value))
            else:
                writes.append((segments[0], _FETCH))
        return writes

    def _created(self, key: str, value: Any) -> ChildEvent | None:
        if value is _FETCH:
            if key in self._seen:
                return None
            value = self._fetch(key) if self._fetch is not None else None

        if value is None:
            self._seen.discard(key)
            return None
        if key in self._seen:
            return None

        self._seen.add(key)
        if not matches_range(value, self.order_by, self.start_at):
            logger.debug("Ignoring /%s/%s outside the subscribed range", self.path, key)
            return None
        return ChildEvent(key=key, value=value, path=join_path(self.path, key))


__all__ = ["ChildTracker", "matches_range"]
