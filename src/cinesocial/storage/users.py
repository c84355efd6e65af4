"""User accounts and the follow graph."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cinesocial.models import User
from cinesocial.schemas import UserCreate, UserProfileUpdate
from cinesocial.storage.base import StoreBase, changes_from, locked, merged
from cinesocial.storage.errors import ConflictError

logger = logging.getLogger(__name__)


class UserStore(StoreBase):
    """Operations on users and on who follows whom."""

    @locked
    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    @locked
    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    @locked
    async def get_user_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    @locked
    async def create_user(self, payload: UserCreate) -> User:
        """Register a user, filling unset role and permissions from settings.

        Raises:
            ConflictError: If the username or email already belongs to someone.
        """
        for existing in self._users.values():
            if existing.username == payload.username:
                raise ConflictError("username", payload.username)
            if existing.email == payload.email:
                raise ConflictError("email", payload.email)

        user = User(
            id=self._next_id("user"),
            username=payload.username,
            email=payload.email,
            password=payload.password,
            display_name=payload.display_name,
            avatar_url=payload.avatar_url,
            google_id=payload.google_id,
            is_admin=payload.is_admin,
            role=payload.role or self.settings.default_user_role,
            permissions=(
                list(payload.permissions)
                if payload.permissions is not None
                else list(self.settings.default_user_permissions)
            ),
            created_at=self._now(),
        )
        self._users[user.id] = user
        logger.debug("Created user %d (%s)", user.id, user.username)
        return user

    @locked
    async def update_user_profile(self, user_id: int, profile: UserProfileUpdate) -> User:
        """Apply the profile fields the caller set."""
        return self._update_user(user_id, changes_from(profile))

    @locked
    async def update_user(self, user_id: int, updates: Mapping[str, Any]) -> User:
        """Apply an admin-level partial update (role, status, verification...)."""
        return self._update_user(user_id, changes_from(updates))

    def _update_user(self, user_id: int, changes: dict[str, Any]) -> User:
        user = self._require(self._users, user_id, "User")
        for field in ("username", "email"):
            value = changes.get(field)
            if value is None or value == getattr(user, field):
                continue
            if any(getattr(other, field) == value for other in self._users.values()):
                raise ConflictError(field, value)
        updated = merged(user, {**changes, "updated_at": self._now()})
        self._users[user_id] = updated
        return updated

    @locked
    async def get_user_count(self) -> int:
        return len(self._users)

    @locked
    async def search_users(self, query: str) -> list[User]:
        """Return users whose username, display name or email contains ``query``."""
        term = query.lower()
        return [
            user
            for user in self._users.values()
            if term in user.username.lower()
            or term in (user.display_name or "").lower()
            or term in user.email.lower()
        ]

    # Follow graph

    @locked
    async def follow_user(self, follower_id: int, following_id: int) -> None:
        if self._follows.add(follower_id, following_id, True):
            logger.debug("User %d follows %d", follower_id, following_id)

    @locked
    async def unfollow_user(self, follower_id: int, following_id: int) -> None:
        self._follows.discard(follower_id, following_id)

    @locked
    async def is_following(self, follower_id: int, following_id: int) -> bool:
        return (follower_id, following_id) in self._follows

    @locked
    async def get_followers(self, user_id: int) -> list[User]:
        return self._users_by_ids(self._follows.lefts_of(user_id))

    @locked
    async def get_following(self, user_id: int) -> list[User]:
        return self._users_by_ids(self._follows.rights_of(user_id))
