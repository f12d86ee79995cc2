"""Tests for parsing raw store values into relay records."""

from app.domain.entities import (
    BootEpoch,
    DirectMessageRecord,
    UserProfile,
    parse_message,
    parse_notification,
)


def test_parse_notification_maps_wire_fields() -> None:
    """Wire names such as ``msg`` and ``pushed`` map onto the record fields."""

    record = parse_notification(
        "U1",
        "n1",
        "notifications/U1/n1",
        {
            "type": "like",
            "msg": "Ana liked your post",
            "from": "A",
            "postKey": "p9",
            "time": 1234.0,
            "pushed": True,
        },
    )

    assert record is not None
    assert record.owner_id == "U1"
    assert record.path == "notifications/U1/n1"
    assert record.type == "like"
    assert record.message == "Ana liked your post"
    assert record.sender_id == "A"
    assert record.post_key == "p9"
    assert record.url == ""
    assert record.created_at == 1234
    assert record.delivered is True


def test_parse_notification_defaults_type_to_system() -> None:
    record = parse_notification("U1", "n1", "notifications/U1/n1", {"msg": "hi"})

    assert record is not None
    assert record.type == "system"
    assert record.delivered is False
    assert record.created_at is None


def test_parse_rejects_values_that_are_not_mappings() -> None:
    """Malformed shapes are rejected at the feed boundary."""

    assert parse_notification("U1", "n1", "notifications/U1/n1", "oops") is None
    assert parse_message("m1", "messages/m1", ["not", "a", "record"]) is None
    assert parse_message("m1", "messages/m1", None) is None


def test_parse_message_flags_incomplete_and_self_messages() -> None:
    incomplete = parse_message("m1", "messages/m1", {"from": "A", "text": "hey"})
    self_message = parse_message("m2", "messages/m2", {"from": "A", "to": "A"})

    assert isinstance(incomplete, DirectMessageRecord)
    assert incomplete.is_complete is False
    assert self_message is not None
    assert self_message.is_complete is True
    assert self_message.is_self_message is True


def test_parse_message_ignores_boolean_timestamps() -> None:
    record = parse_message(
        "m1", "messages/m1", {"from": "A", "to": "B", "timestamp": True, "isSticker": 1}
    )

    assert record is not None
    assert record.created_at is None
    assert record.is_sticker is True


def test_user_profile_treats_empty_token_as_missing() -> None:
    profile = UserProfile.from_value("U1", {"name": "Ana", "fcmToken": ""})

    assert profile == UserProfile(user_id="U1", name="Ana", fcm_token=None)
    assert UserProfile.from_value("U1", None) is None


def test_boot_epoch_uptime_is_never_negative() -> None:
    epoch = BootEpoch.capture(clock=lambda: 1_000.0, monotonic=lambda: 50.0)

    assert epoch.millis == 1_000
    assert epoch.uptime_seconds(monotonic=lambda: 62.9) == 12
    assert epoch.uptime_seconds(monotonic=lambda: 10.0) == 0
    assert epoch.started_at.year == 1970
