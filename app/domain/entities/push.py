"""Value objects exchanged with push delivery transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class VibrationProfile:
    """Haptic pattern and persistence hint attached to a web push."""

    vibrate: tuple[int, ...]
    require_interaction: bool = False


DEFAULT_VIBRATION_PROFILE = VibrationProfile(vibrate=(200, 100, 200))


@dataclass(frozen=True)
class PushMessage:
    """Fully built push notification ready to hand to a transport."""

    token: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    profile: VibrationProfile = DEFAULT_VIBRATION_PROFILE
    icon: str | None = None
    badge: str | None = None
    link: str = "/"


class PushOutcome(str, Enum):
    SENT = "sent"
    TOKEN_INVALID = "token_invalid"
    TOKEN_UNREGISTERED = "token_unregistered"
    FAILED = "failed"


@dataclass(frozen=True)
class PushResult:
    """Classified result of a delivery attempt."""

    outcome: PushOutcome
    message_id: str | None = None
    error_code: str | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is PushOutcome.SENT

    @property
    def stale_token(self) -> bool:
        return self.outcome in (PushOutcome.TOKEN_INVALID, PushOutcome.TOKEN_UNREGISTERED)

    @classmethod
    def sent(cls, message_id: str | None = None) -> "PushResult":
        return cls(outcome=PushOutcome.SENT, message_id=message_id)

    @classmethod
    def failed(cls, error_code: str, detail: str | None = None) -> "PushResult":
        return cls(outcome=PushOutcome.FAILED, error_code=error_code, detail=detail)


__all__ = [
    "DEFAULT_VIBRATION_PROFILE",
    "PushMessage",
    "PushOutcome",
    "PushResult",
    "VibrationProfile",
]
