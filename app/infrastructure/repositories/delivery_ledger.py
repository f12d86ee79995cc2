"""Persistence of the per-record delivered flag."""

from __future__ import annotations

from app.application.ports import ChangeFeedStore
from app.domain.entities import RelayRecord

DELIVERED_FIELD = "pushed"


class DeliveryLedger:
    """Record on the source record itself that its push was sent."""

    def __init__(self, store: ChangeFeedStore) -> None:
        self._store = store

    @staticmethod
    def is_delivered(record: RelayRecord) -> bool:
        return record.delivered

    async def mark_delivered(self, record: RelayRecord) -> None:
        # Single field update on the exact path of the triggering event so
        # concurrent writers to other fields are left alone.
        await self._store.update(record.path, {DELIVERED_FIELD: True})


__all__ = ["DELIVERED_FIELD", "DeliveryLedger"]
