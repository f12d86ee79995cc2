"""Outcome of handling a single change feed record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DispatchStatus(str, Enum):
    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchResult:
    """What the dispatch engine did with a record and why."""

    status: DispatchStatus
    reason: str
    record_path: str | None = None

    @classmethod
    def delivered(cls, record_path: str) -> "DispatchResult":
        return cls(DispatchStatus.DELIVERED, "push_sent", record_path)

    @classmethod
    def skipped(cls, reason: str, record_path: str | None = None) -> "DispatchResult":
        return cls(DispatchStatus.SKIPPED, reason, record_path)

    @classmethod
    def failed(cls, reason: str, record_path: str | None = None) -> "DispatchResult":
        return cls(DispatchStatus.FAILED, reason, record_path)


__all__ = ["DispatchResult", "DispatchStatus"]
