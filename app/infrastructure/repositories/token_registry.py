"""Lookup and cleanup of device tokens stored on user profiles."""

from __future__ import annotations

import logging
from typing import Mapping

from app.application.ports import ChangeFeedStore, join_path
from app.domain.entities import UserProfile

logger = logging.getLogger(__name__)

USERS_PATH = "users"
TOKEN_FIELD = "fcmToken"


class TokenRegistry:
    """Map user identifiers to their current push device token."""

    def __init__(self, store: ChangeFeedStore, *, users_path: str = USERS_PATH) -> None:
        self._store = store
        self._users_path = users_path

    async def get_profile(self, user_id: str) -> UserProfile | None:
        if not user_id:
            return None
        value = await self._store.get(join_path(self._users_path, user_id))
        return UserProfile.from_value(user_id, value)

    async def lookup_by_user(self, user_id: str) -> str | None:
        profile = await self.get_profile(user_id)
        return profile.fcm_token if profile is not None else None

    async def invalidate(self, token: str) -> int:
        """Clear ``token`` from every profile that still holds it.

        The store has no reverse index, so the whole user collection is
        scanned. Returns the number of profiles cleared.
        """

        if not token:
            return 0

        users = await self._store.get(self._users_path)
        if not isinstance(users, Mapping):
            return 0

        cleared = 0
        for user_id, value in users.items():
            if not isinstance(value, Mapping) or value.get(TOKEN_FIELD) != token:
                continue
            await self._store.update(
                join_path(self._users_path, str(user_id)), {TOKEN_FIELD: None}
            )
            cleared += 1

        if cleared:
            logger.info("Removed stale push token from %s profile(s)", cleared)
        return cleared


__all__ = ["TOKEN_FIELD", "TokenRegistry", "USERS_PATH"]
