"""Abstract interfaces the relay core depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Mapping

from app.domain.entities import PushMessage, PushResult


@dataclass(frozen=True)
class ChildEvent:
    """A child created under a watched path."""

    key: str
    value: Any
    path: str


class ChangeFeedStore(ABC):
    """Ordered key-value store that announces newly created children."""

    @abstractmethod
    def subscribe(
        self,
        path: str,
        *,
        order_by: str | None = None,
        start_at: float | None = None,
    ) -> AsyncIterator[ChildEvent]:
        """Yield an event for every child created under ``path``.

        When ``order_by`` and ``start_at`` are given, only children whose
        ``order_by`` field is a number greater than or equal to ``start_at``
        are yielded. The iterator never ends on its own and cannot be
        restarted.
        """

    @abstractmethod
    async def get(self, path: str) -> Any:
        """Return the value stored at ``path`` or ``None``."""

    @abstractmethod
    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        """Update only the given fields of ``path``; ``None`` removes a field."""


class PushTransport(ABC):
    """Backend able to deliver a push notification to a device token."""

    @abstractmethod
    async def send(self, message: PushMessage) -> PushResult:
        """Deliver ``message`` and classify the outcome."""


def join_path(*parts: str) -> str:
    """Join store path segments, ignoring empty ones and stray slashes."""

    return "/".join(part.strip("/") for part in parts if part and part.strip("/"))


__all__ = ["ChangeFeedStore", "ChildEvent", "PushTransport", "join_path"]
