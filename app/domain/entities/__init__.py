"""Domain entities exposed by the relay."""

from .boot_epoch import BootEpoch, Clock, wall_clock_millis
from .dispatch_result import DispatchResult, DispatchStatus
from .push import (
    DEFAULT_VIBRATION_PROFILE,
    PushMessage,
    PushOutcome,
    PushResult,
    VibrationProfile,
)
from .records import (
    DEFAULT_NOTIFICATION_TYPE,
    DirectMessageRecord,
    NotificationRecord,
    RelayRecord,
    parse_message,
    parse_notification,
)
from .user_profile import UserProfile

__all__ = [
    "BootEpoch",
    "Clock",
    "wall_clock_millis",
    "DispatchResult",
    "DispatchStatus",
    "DEFAULT_VIBRATION_PROFILE",
    "PushMessage",
    "PushOutcome",
    "PushResult",
    "VibrationProfile",
    "DEFAULT_NOTIFICATION_TYPE",
    "DirectMessageRecord",
    "NotificationRecord",
    "RelayRecord",
    "parse_message",
    "parse_notification",
    "UserProfile",
]
