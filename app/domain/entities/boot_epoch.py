"""Process start marker used to ignore records written before boot."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], float]


def wall_clock_millis() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class BootEpoch:
    """Wall clock boot time in epoch milliseconds plus a monotonic anchor."""

    millis: int
    monotonic: float

    @classmethod
    def capture(
        cls,
        clock: Clock = wall_clock_millis,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> "BootEpoch":
        return cls(millis=int(clock()), monotonic=monotonic())

    @property
    def started_at(self) -> datetime:
        return datetime.fromtimestamp(self.millis / 1000, tz=timezone.utc)

    def uptime_seconds(self, monotonic: Callable[[], float] = time.monotonic) -> int:
        return max(0, int(monotonic() - self.monotonic))


__all__ = ["BootEpoch", "Clock", "wall_clock_millis"]
