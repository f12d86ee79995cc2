"""Tests for the Firebase Cloud Messaging transport."""

from __future__ import annotations

import pytest

pytest.importorskip("firebase_admin")

from firebase_admin import exceptions, messaging

from app.domain.entities import PushMessage, PushOutcome, VibrationProfile
from app.infrastructure.push import fcm


def _message(**overrides) -> PushMessage:
    values = {
        "token": "T1",
        "title": "🎱 BINGO CALL!",
        "body": "B-7!",
        "data": {"type": "bingo", "url": "/"},
        "profile": VibrationProfile((300, 100, 300, 100, 300, 100, 300), True),
        "icon": "https://cdn.example.com/icon.png",
        "badge": "https://cdn.example.com/badge.png",
        "link": "/",
    }
    values.update(overrides)
    return PushMessage(**values)


def test_build_fcm_message_carries_webpush_hints() -> None:
    built = fcm.build_fcm_message(_message())

    assert built.token == "T1"
    assert built.notification.title == "🎱 BINGO CALL!"
    assert built.notification.body == "B-7!"
    assert built.data == {"type": "bingo", "url": "/"}
    webpush = built.webpush.notification
    assert webpush.vibrate == [300, 100, 300, 100, 300, 100, 300]
    assert webpush.require_interaction is True
    assert webpush.icon == "https://cdn.example.com/icon.png"
    assert webpush.badge == "https://cdn.example.com/badge.png"


def test_relative_click_link_is_not_sent_as_fcm_option() -> None:
    assert fcm.build_fcm_message(_message(link="/")).webpush.fcm_options is None

    absolute = fcm.build_fcm_message(_message(link="https://relay.example.com/"))
    assert absolute.webpush.fcm_options.link == "https://relay.example.com/"


@pytest.mark.parametrize(
    ("error", "outcome", "code"),
    [
        (
            messaging.UnregisteredError("Requested entity was not found."),
            PushOutcome.TOKEN_UNREGISTERED,
            fcm.UNREGISTERED_TOKEN_CODE,
        ),
        (
            exceptions.InvalidArgumentError(
                "The registration token is not a valid FCM registration token"
            ),
            PushOutcome.TOKEN_INVALID,
            fcm.INVALID_TOKEN_CODE,
        ),
        (
            messaging.SenderIdMismatchError("SenderId mismatch"),
            PushOutcome.TOKEN_INVALID,
            fcm.INVALID_TOKEN_CODE,
        ),
        (
            exceptions.InvalidArgumentError("Invalid JSON payload received."),
            PushOutcome.FAILED,
            "messaging/invalid_argument",
        ),
        (
            exceptions.UnavailableError("Service unavailable"),
            PushOutcome.FAILED,
            "messaging/unavailable",
        ),
        (RuntimeError("socket closed"), PushOutcome.FAILED, "unknown"),
    ],
)
def test_classify_error(error, outcome, code) -> None:
    result = fcm.classify_error(error)

    assert result.outcome is outcome
    assert result.error_code == code


@pytest.mark.anyio
async def test_send_returns_provider_message_id(monkeypatch) -> None:
    calls = []

    def fake_send(message, app=None, dry_run=False):
        calls.append((message, app))
        return "projects/demo/messages/1"

    monkeypatch.setattr(fcm.messaging, "send", fake_send)
    transport = fcm.FcmPushTransport(app=None)

    result = await transport.send(_message())

    assert result.ok is True
    assert result.message_id == "projects/demo/messages/1"
    assert calls[0][0].token == "T1"


@pytest.mark.anyio
async def test_send_classifies_raised_errors(monkeypatch) -> None:
    def fake_send(message, app=None, dry_run=False):
        raise messaging.UnregisteredError("Requested entity was not found.")

    monkeypatch.setattr(fcm.messaging, "send", fake_send)

    result = await fcm.FcmPushTransport().send(_message())

    assert result.outcome is PushOutcome.TOKEN_UNREGISTERED
    assert result.stale_token is True
