"""Firebase Cloud Messaging push transport."""

from __future__ import annotations

import functools
import logging

import anyio
from firebase_admin import App, exceptions, messaging

from app.application.ports import PushTransport
from app.domain.entities import PushMessage, PushOutcome, PushResult

logger = logging.getLogger(__name__)

INVALID_TOKEN_CODE = "messaging/invalid-registration-token"
UNREGISTERED_TOKEN_CODE = "messaging/registration-token-not-registered"


class FcmPushTransport(PushTransport):
    """Deliver web pushes through the Firebase Admin messaging client."""

    def __init__(self, app: App | None = None) -> None:
        self._app = app

    async def send(self, message: PushMessage) -> PushResult:
        try:
            fcm_message = build_fcm_message(message)
            message_id = await anyio.to_thread.run_sync(
                functools.partial(messaging.send, fcm_message, app=self._app)
            )
        except Exception as exc:
            return classify_error(exc)
        return PushResult.sent(message_id)


def build_fcm_message(message: PushMessage) -> messaging.Message:
    """Translate ``message`` into a :class:`firebase_admin.messaging.Message`."""

    fcm_options = None
    # FCM rejects click-through links that are not absolute HTTPS URLs; the
    # link still reaches the client through the ``url`` data entry.
    if message.link.startswith("https://"):
        fcm_options = messaging.WebpushFCMOptions(link=message.link)

    return messaging.Message(
        token=message.token,
        notification=messaging.Notification(title=message.title, body=message.body),
        data=dict(message.data),
        webpush=messaging.WebpushConfig(
            notification=messaging.WebpushNotification(
                icon=message.icon,
                badge=message.badge,
                vibrate=list(message.profile.vibrate),
                require_interaction=message.profile.require_interaction,
            ),
            fcm_options=fcm_options,
        ),
    )


def classify_error(exc: Exception) -> PushResult:
    """Map a messaging error onto a :class:`PushOutcome`."""

    if isinstance(exc, messaging.UnregisteredError):
        return PushResult(
            outcome=PushOutcome.TOKEN_UNREGISTERED,
            error_code=UNREGISTERED_TOKEN_CODE,
            detail=str(exc),
        )
    if isinstance(exc, messaging.SenderIdMismatchError) or (
        isinstance(exc, exceptions.InvalidArgumentError)
        and "registration token" in str(exc).lower()
    ):
        return PushResult(
            outcome=PushOutcome.TOKEN_INVALID,
            error_code=INVALID_TOKEN_CODE,
            detail=str(exc),
        )
    if isinstance(exc, exceptions.FirebaseError):
        return PushResult.failed(f"messaging/{exc.code}".lower(), str(exc))

    logger.debug("Unclassified push error", exc_info=exc)
    return PushResult.failed("unknown", str(exc) or exc.__class__.__name__)


__all__ = [
    "FcmPushTransport",
    "INVALID_TOKEN_CODE",
    "UNREGISTERED_TOKEN_CODE",
    "build_fcm_message",
    "classify_error",
]
