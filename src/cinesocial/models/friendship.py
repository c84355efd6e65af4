"""Models for friend requests and the friendships they create."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from cinesocial.models.base import Entity

FRIEND_REQUEST_PENDING = "pending"
FRIEND_REQUEST_ACCEPTED = "accepted"
FRIEND_REQUEST_REJECTED = "rejected"

FRIENDSHIP_ACTIVE = "active"
FRIENDSHIP_BLOCKED = "blocked"


class FriendRequest(Entity):
    """Directed request that becomes a Friendship once accepted."""

    sender_id: int
    receiver_id: int
    status: Literal["pending", "accepted", "rejected"] = FRIEND_REQUEST_PENDING
    message: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class Friendship(Entity):
    """Undirected edge between two users; ``user1_id`` is always the smaller id."""

    user1_id: int
    user2_id: int
    status: Literal["active", "blocked"] = FRIENDSHIP_ACTIVE
    created_at: datetime
    updated_at: datetime | None = None

    def other(self, user_id: int) -> int:
        """Return the id of the participant that is not ``user_id``."""
        return self.user2_id if self.user1_id == user_id else self.user1_id
