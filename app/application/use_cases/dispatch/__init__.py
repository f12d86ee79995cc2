"""Use cases that deliver pushes for change feed records."""

from .engine import DispatchEngine
from .payloads import message_body, truncate_preview, vibration_profile_for

__all__ = ["DispatchEngine", "message_body", "truncate_preview", "vibration_profile_for"]
