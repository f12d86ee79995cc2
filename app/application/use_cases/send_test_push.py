"""Use case for sending a manual push to a single user."""

from __future__ import annotations

from app.application.use_cases.dispatch.payloads import vibration_profile_for
from app.infrastructure.push import PushProvider
from app.infrastructure.repositories import TokenRegistry

DEFAULT_TEST_TITLE = "🔔 Test"
DEFAULT_TEST_BODY = "Push is working!"
TEST_PUSH_TYPE = "system"


class MissingDeviceTokenError(LookupError):
    """Raised when the target user has no registered device token."""


async def send_test_push(
    token_registry: TokenRegistry,
    push_provider: PushProvider,
    *,
    user_id: str,
    title: str | None = None,
    body: str | None = None,
) -> bool:
    """Send a test push to ``user_id`` and return whether it was accepted."""

    token = await token_registry.lookup_by_user(user_id)
    if not token:
        raise MissingDeviceTokenError("No FCM token for this user")

    return await push_provider.send(
        token,
        title or DEFAULT_TEST_TITLE,
        body or DEFAULT_TEST_BODY,
        {"type": TEST_PUSH_TYPE},
        vibration_profile_for(TEST_PUSH_TYPE),
    )


__all__ = [
    "DEFAULT_TEST_BODY",
    "DEFAULT_TEST_TITLE",
    "MissingDeviceTokenError",
    "send_test_push",
]
