"""Domain entities for the records watched on the change feeds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

DEFAULT_NOTIFICATION_TYPE = "system"


@dataclass(frozen=True)
class NotificationRecord:
    """Notification written under ``notifications/<owner_id>/<record_id>``."""

    owner_id: str
    record_id: str
    path: str
    type: str = DEFAULT_NOTIFICATION_TYPE
    message: str = ""
    sender_id: str = ""
    post_key: str = ""
    url: str = ""
    created_at: int | None = None
    delivered: bool = False


@dataclass(frozen=True)
class DirectMessageRecord:
    """Direct message written under ``messages/<record_id>``."""

    record_id: str
    path: str
    sender_id: str = ""
    recipient_id: str = ""
    text: str = ""
    image: str = ""
    audio: str = ""
    is_sticker: bool = False
    created_at: int | None = None
    delivered: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.sender_id and self.recipient_id)

    @property
    def is_self_message(self) -> bool:
        return self.sender_id == self.recipient_id


RelayRecord = Union[NotificationRecord, DirectMessageRecord]


def parse_notification(
    owner_id: str, record_id: str, path: str, value: Any
) -> NotificationRecord | None:
    """Build a :class:`NotificationRecord` from a raw store value.

    Returns ``None`` when ``value`` is not a mapping.
    """

    if not isinstance(value, Mapping):
        return None

    return NotificationRecord(
        owner_id=owner_id,
        record_id=record_id,
        path=path,
        type=_text(value.get("type")) or DEFAULT_NOTIFICATION_TYPE,
        message=_text(value.get("msg")),
        sender_id=_text(value.get("from")),
        post_key=_text(value.get("postKey")),
        url=_text(value.get("url")),
        created_at=_millis(value.get("time")),
        delivered=bool(value.get("pushed")),
    )


def parse_message(record_id: str, path: str, value: Any) -> DirectMessageRecord | None:
    """Build a :class:`DirectMessageRecord` from a raw store value.

    Returns ``None`` when ``value`` is not a mapping.
    """

    if not isinstance(value, Mapping):
        return None

    return DirectMessageRecord(
        record_id=record_id,
        path=path,
        sender_id=_text(value.get("from")),
        recipient_id=_text(value.get("to")),
        text=_text(value.get("text")),
        image=_text(value.get("image")),
        audio=_text(value.get("audio")),
        is_sticker=bool(value.get("isSticker")),
        created_at=_millis(value.get("timestamp")),
        delivered=bool(value.get("pushed")),
    )


def _text(value: Any) -> str:
    if value is None or value is False:
        return ""
    return str(value)


def _millis(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


__all__ = [
    "DEFAULT_NOTIFICATION_TYPE",
    "DirectMessageRecord",
    "NotificationRecord",
    "RelayRecord",
    "parse_message",
    "parse_notification",
]
