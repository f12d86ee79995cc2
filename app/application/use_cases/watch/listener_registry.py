"""Process-wide record of the owner scopes that already have a watcher."""

from __future__ import annotations

import threading


class ListenerRegistry:
    """Set of owner ids with an attached notification watcher.

    Entries are never removed; the registry lives as long as the process.
    """

    def __init__(self) -> None:
        self._attached: set[str] = set()
        self._lock = threading.Lock()

    def claim(self, owner_id: str) -> bool:
        """Atomically add ``owner_id``; return ``False`` if it was present."""

        with self._lock:
            if owner_id in self._attached:
                return False
            self._attached.add(owner_id)
            return True

    def is_attached(self, owner_id: str) -> bool:
        with self._lock:
            return owner_id in self._attached

    @property
    def attached(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._attached)

    def __len__(self) -> int:
        with self._lock:
            return len(self._attached)


__all__ = ["ListenerRegistry"]
