"""Static tables and helpers used to turn records into push payloads.

The vibration patterns must stay identical to the ones the web client
renders, so they are kept as plain data here.
"""

from __future__ import annotations

from typing import Final, Mapping

from app.domain.entities import (
    DEFAULT_VIBRATION_PROFILE,
    DirectMessageRecord,
    NotificationRecord,
    VibrationProfile,
)

MESSAGE_TYPE: Final[str] = "pm"
MESSAGE_URL: Final[str] = "/?section=messages"
MESSAGE_TITLE_PREFIX: Final[str] = "💬 "
UNKNOWN_SENDER_NAME: Final[str] = "Someone"
MESSAGE_PREVIEW_LIMIT: Final[int] = 80
ELLIPSIS: Final[str] = "..."

GENERIC_TITLE: Final[str] = "🔔 Radio Bingo Live"
GENERIC_BODY: Final[str] = "You have a new notification!"
DEFAULT_URL: Final[str] = "/"

PHOTO_BODY: Final[str] = "📷 Sent a photo"
VOICE_NOTE_BODY: Final[str] = "🎙️ Sent a voice note"
STICKER_BODY: Final[str] = "😄 Sent a sticker"
GENERIC_MESSAGE_BODY: Final[str] = "Sent you a message"

NOTIFICATION_TITLES: Final[Mapping[str, str]] = {
    "pm": "💬 New Message",
    "like": "❤️ Someone liked your post",
    "comment": "💬 New comment on your post",
    "share": "🔁 Someone shared your post",
    "mention": "🏷️ You were mentioned",
    "follow": "👤 New Follower",
    "bingo": "🎱 BINGO CALL!",
    "game_soon": "⏰ Game is starting soon!",
    "win": "🏆 You won!",
    "coins": "🪙 You received Coins!",
    "promo": "🎟️ You have a special promo!",
    "system": "📢 Admin Announcement",
    "gift": "🎁 You received a Gift!",
}

DEFAULT_PROFILE: Final[VibrationProfile] = DEFAULT_VIBRATION_PROFILE

VIBRATION_PROFILES: Final[Mapping[str, VibrationProfile]] = {
    "pm": VibrationProfile((100, 50, 100), True),
    "bingo": VibrationProfile((300, 100, 300, 100, 300, 100, 300), True),
    "game_soon": VibrationProfile((200, 100, 200, 100, 200), True),
    "win": VibrationProfile((100, 50, 100, 50, 100, 50, 400), True),
    "like": VibrationProfile((100,), False),
    "comment": VibrationProfile((100, 50, 100), False),
    "follow": VibrationProfile((100, 50, 100), False),
    "coins": VibrationProfile((100, 50, 100, 50, 200), False),
    "promo": VibrationProfile((200, 100, 200), True),
    "system": VibrationProfile((200, 100, 200), False),
}


def vibration_profile_for(notification_type: str | None) -> VibrationProfile:
    """Return the display hints for ``notification_type``."""

    return VIBRATION_PROFILES.get(notification_type or "", DEFAULT_PROFILE)


def notification_title(notification_type: str | None) -> str:
    return NOTIFICATION_TITLES.get(notification_type or "", GENERIC_TITLE)


def notification_body(record: NotificationRecord) -> str:
    return record.message or GENERIC_BODY


def notification_metadata(record: NotificationRecord) -> dict[str, str]:
    return {
        "type": record.type,
        "senderUid": record.sender_id,
        "postKey": record.post_key,
        "url": record.url or DEFAULT_URL,
    }


def truncate_preview(text: str, limit: int = MESSAGE_PREVIEW_LIMIT) -> str:
    """Cut ``text`` at ``limit`` characters and mark the cut with an ellipsis."""

    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def message_body(record: DirectMessageRecord) -> str:
    """Pick the message preview in text, photo, voice note, sticker order."""

    if record.text:
        return truncate_preview(record.text)
    if record.image:
        return PHOTO_BODY
    if record.audio:
        return VOICE_NOTE_BODY
    if record.is_sticker:
        return STICKER_BODY
    return GENERIC_MESSAGE_BODY


def message_title(sender_name: str | None) -> str:
    return MESSAGE_TITLE_PREFIX + (sender_name or UNKNOWN_SENDER_NAME)


def message_metadata(record: DirectMessageRecord) -> dict[str, str]:
    return {
        "type": MESSAGE_TYPE,
        "senderUid": record.sender_id,
        "url": MESSAGE_URL,
    }


__all__ = [
    "DEFAULT_PROFILE",
    "GENERIC_BODY",
    "GENERIC_MESSAGE_BODY",
    "GENERIC_TITLE",
    "MESSAGE_PREVIEW_LIMIT",
    "MESSAGE_TYPE",
    "MESSAGE_URL",
    "NOTIFICATION_TITLES",
    "PHOTO_BODY",
    "STICKER_BODY",
    "UNKNOWN_SENDER_NAME",
    "VIBRATION_PROFILES",
    "VOICE_NOTE_BODY",
    "message_body",
    "message_metadata",
    "message_title",
    "notification_body",
    "notification_metadata",
    "notification_title",
    "truncate_preview",
    "vibration_profile_for",
]
