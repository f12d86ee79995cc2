"""Domain entity representing the push-relevant part of a user profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class UserProfile:
    """Display name and current device token of a user."""

    user_id: str
    name: str | None = None
    fcm_token: str | None = None

    @classmethod
    def from_value(cls, user_id: str, value: Any) -> "UserProfile | None":
        if not isinstance(value, Mapping):
            return None
        name = value.get("name")
        token = value.get("fcmToken")
        return cls(
            user_id=user_id,
            name=str(name) if name else None,
            fcm_token=str(token) if token else None,
        )


__all__ = ["UserProfile"]
