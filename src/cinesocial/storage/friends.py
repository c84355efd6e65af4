"""Friend requests, friendships and friend suggestions.

A friend request moves ``pending -> accepted | rejected`` exactly once.
Acceptance creates one Friendship stored under the canonical ``(low, high)``
pair, so lookups give the same row whichever order the ids are passed in.
A friendship then moves freely between ``active`` and ``blocked``.
"""

from __future__ import annotations

import logging
from typing import Literal

from cinesocial.models import FriendRequest, Friendship, User, UserSuggestion
from cinesocial.models.friendship import (
    FRIEND_REQUEST_ACCEPTED,
    FRIEND_REQUEST_PENDING,
    FRIENDSHIP_ACTIVE,
    FRIENDSHIP_BLOCKED,
)
from cinesocial.schemas import FriendRequestCreate
from cinesocial.storage.base import StoreBase, locked, merged, newest_first
from cinesocial.storage.errors import InvalidTransitionError
from cinesocial.storage.indices import canonical_pair

logger = logging.getLogger(__name__)


class FriendStore(StoreBase):
    """Operations on the friendship graph.

    Duplicate requests and requests between existing friends are not rejected
    here; callers consult ``get_friend_requests_by_user`` and
    ``check_friendship`` first.
    """

    @locked
    async def create_friend_request(
        self, sender_id: int, payload: FriendRequestCreate
    ) -> FriendRequest:
        request = FriendRequest(
            id=self._next_id("friend_request"),
            sender_id=sender_id,
            receiver_id=payload.receiver_id,
            message=payload.message,
            created_at=self._now(),
        )
        self._friend_requests[request.id] = request
        return request

    @locked
    async def get_friend_request(self, request_id: int) -> FriendRequest | None:
        return self._friend_requests.get(request_id)

    @locked
    async def get_friend_requests_by_user(
        self, user_id: int, kind: Literal["sent", "received"]
    ) -> list[FriendRequest]:
        """Return the user's pending requests in one direction, newest first."""
        field = "sender_id" if kind == "sent" else "receiver_id"
        return newest_first(
            r
            for r in self._friend_requests.values()
            if getattr(r, field) == user_id and r.status == FRIEND_REQUEST_PENDING
        )

    @locked
    async def update_friend_request_status(
        self, request_id: int, status: Literal["accepted", "rejected"]
    ) -> FriendRequest:
        """Accept or reject a pending request.

        Raises:
            NotFoundError: If the request does not exist.
            InvalidTransitionError: If the request was already answered.
        """
        request = self._require(self._friend_requests, request_id, "Friend request")
        if request.status != FRIEND_REQUEST_PENDING:
            raise InvalidTransitionError("Friend request", request_id, request.status, status)

        now = self._now()
        updated = merged(request, {"status": status, "updated_at": now})
        self._friend_requests[request_id] = updated
        logger.info("Friend request %d %s", request_id, status)

        if status == FRIEND_REQUEST_ACCEPTED:
            low, high = canonical_pair(request.sender_id, request.receiver_id)
            existing = self._friendships.get(low, high)
            if existing is None:
                friendship = Friendship(
                    id=self._next_id("friendship"),
                    user1_id=low,
                    user2_id=high,
                    created_at=now,
                )
            else:
                friendship = existing.model_copy(
                    update={"status": FRIENDSHIP_ACTIVE, "updated_at": now}
                )
            self._friendships.set(low, high, friendship)
        return updated

    @locked
    async def get_friendship(self, user1_id: int, user2_id: int) -> Friendship | None:
        return self._friendships.get(*canonical_pair(user1_id, user2_id))

    @locked
    async def check_friendship(self, user1_id: int, user2_id: int) -> bool:
        return self._is_friend(user1_id, user2_id)

    @locked
    async def get_friendships(self, user_id: int) -> list[User]:
        """Return the user's active friends."""
        return self._users_by_ids(self._friend_ids(user_id))

    @locked
    async def remove_friend(self, user1_id: int, user2_id: int) -> None:
        self._friendships.discard(*canonical_pair(user1_id, user2_id))

    @locked
    async def block_friend(self, user_id: int, friend_id: int) -> None:
        self._set_friendship_status(user_id, friend_id, FRIENDSHIP_BLOCKED)

    @locked
    async def unblock_friend(self, user_id: int, friend_id: int) -> None:
        self._set_friendship_status(user_id, friend_id, FRIENDSHIP_ACTIVE)

    @locked
    async def get_friend_suggestions(self, user_id: int) -> list[UserSuggestion]:
        """Rank everyone who is not already a friend by mutual-friend count.

        Ties keep user id order.
        """
        friend_ids = set(self._friend_ids(user_id))
        suggestions = [
            UserSuggestion(
                **user.model_dump(),
                mutual_friends=len(friend_ids.intersection(self._friend_ids(user.id))),
            )
            for user in self._users.values()
            if user.id != user_id and user.id not in friend_ids
        ]
        suggestions.sort(key=lambda s: s.mutual_friends, reverse=True)
        return suggestions

    def _friend_ids(self, user_id: int) -> list[int]:
        return [
            friendship.other(user_id)
            for _, friendship in self._friendships.items_for(user_id)
            if friendship.status == FRIENDSHIP_ACTIVE
        ]

    def _is_friend(self, user1_id: int, user2_id: int) -> bool:
        friendship = self._friendships.get(*canonical_pair(user1_id, user2_id))
        return friendship is not None and friendship.status == FRIENDSHIP_ACTIVE

    def _set_friendship_status(self, user_id: int, friend_id: int, status: str) -> None:
        low, high = canonical_pair(user_id, friend_id)
        friendship = self._friendships.get(low, high)
        if friendship is None or friendship.status == status:
            return
        self._friendships.set(
            low, high, friendship.model_copy(update={"status": status, "updated_at": self._now()})
        )
        logger.info("Friendship %d:%d %s", low, high, status)
