"""Models for user identities."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from cinesocial.models.base import Entity

USER_STATUS_ACTIVE = "active"
USER_STATUS_SUSPENDED = "suspended"
USER_STATUS_BANNED = "banned"


class User(Entity):
    """Identity root for every other entity."""

    username: str
    email: str
    password: str = Field(repr=False)
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    is_admin: bool = False
    is_verified: bool = False
    # user, moderator, content_manager, admin
    role: str = "user"
    permissions: list[str] = Field(default_factory=list)
    status: str = USER_STATUS_ACTIVE
    location: str | None = None
    website: str | None = None
    google_id: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


class UserSuggestion(User):
    """User annotated with friendship context for suggestion lists."""

    is_friend: bool = False
    mutual_friends: int = 0
