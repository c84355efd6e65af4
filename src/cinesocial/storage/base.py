"""Shared state and helpers for the in-memory entity store."""

from __future__ import annotations

import functools
import logging
import threading
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, ParamSpec, TypeVar

from pydantic import BaseModel

from cinesocial.core.settings import Settings
from cinesocial.core.settings import settings as default_settings
from cinesocial.models import (
    Comment,
    Community,
    Conversation,
    DMCAClaim,
    FriendRequest,
    Friendship,
    Message,
    ModerationQueueItem,
    Movie,
    MovieComment,
    MovieRating,
    MovieReport,
    Post,
    Story,
    User,
    WatchHistory,
)
from cinesocial.models.base import Entity
from cinesocial.storage.errors import NotFoundError
from cinesocial.storage.indices import IdSequence, RelationIndex
from cinesocial.utils.time import Clock, utcnow

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)
P = ParamSpec("P")
R = TypeVar("R")


def locked(method: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Run a store coroutine while holding the store's lock.

    Store coroutines never suspend, so the lock is held for one uninterrupted
    read-modify-write step and released before control returns to the loop.
    """

    @functools.wraps(method)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        store = args[0]
        with store._lock:  # type: ignore[attr-defined]
            return await method(*args, **kwargs)

    return wrapper


def floored(value: int, delta: int) -> int:
    """Apply ``delta`` to a counter without letting it drop below zero."""
    return max(0, value + delta)


def newest_first(items: Iterable[E]) -> list[E]:
    """Sort entities by creation time, newest first; later ids win ties."""
    return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)  # type: ignore[attr-defined]


def oldest_first(items: Iterable[E]) -> list[E]:
    """Sort entities by creation time, oldest first; earlier ids win ties."""
    return sorted(items, key=lambda item: (item.created_at, item.id))  # type: ignore[attr-defined]


def merged(entity: E, changes: Mapping[str, Any]) -> E:
    """Return a validated copy of ``entity`` with ``changes`` shallow-merged in."""
    return type(entity).model_validate({**entity.model_dump(), **changes})


def changes_from(partial: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Return the fields a caller actually supplied, never including ``id``."""
    if isinstance(partial, BaseModel):
        data = partial.model_dump(exclude_unset=True)
    else:
        data = dict(partial)
    data.pop("id", None)
    return data


class StoreBase:
    """Holds every collection, index and id sequence of the store.

    Entity collections are plain ``id -> entity`` dicts. Relationship indices
    are keyed by ``(left, right)`` id pairs as documented on each attribute.
    """

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None) -> None:
        self.settings = settings or default_settings
        self._now = clock or utcnow
        self._lock = threading.RLock()
        self._ids: defaultdict[str, IdSequence] = defaultdict(IdSequence)

        self._users: dict[int, User] = {}
        self._posts: dict[int, Post] = {}
        self._comments: dict[int, Comment] = {}
        self._stories: dict[int, Story] = {}
        self._conversations: dict[int, Conversation] = {}
        self._messages: dict[int, Message] = {}
        self._communities: dict[int, Community] = {}
        self._movies: dict[int, Movie] = {}
        self._movie_comments: dict[int, MovieComment] = {}
        self._movie_reports: dict[int, MovieReport] = {}
        self._watch_history: dict[int, WatchHistory] = {}
        self._dmca_claims: dict[int, DMCAClaim] = {}
        self._friend_requests: dict[int, FriendRequest] = {}
        self._moderation_queue: dict[int, ModerationQueueItem] = {}

        # (user_id, post_id)
        self._post_likes: RelationIndex[bool] = RelationIndex()
        # (user_id, comment_id)
        self._comment_likes: RelationIndex[bool] = RelationIndex()
        # (user_id, post_id) -> reaction types in the order they were added
        self._reactions: RelationIndex[tuple[str, ...]] = RelationIndex()
        # (follower_id, following_id)
        self._follows: RelationIndex[bool] = RelationIndex()
        # (user_id, community_id) -> role
        self._community_members: RelationIndex[str] = RelationIndex()
        # (user_id, movie_id)
        self._watchlist: RelationIndex[bool] = RelationIndex()
        # (user_id, movie_id)
        self._movie_likes: RelationIndex[bool] = RelationIndex()
        # (user_id, movie_comment_id)
        self._movie_comment_likes: RelationIndex[bool] = RelationIndex()
        # (user_id, movie_id) -> rating row
        self._movie_ratings: RelationIndex[MovieRating] = RelationIndex()
        # canonical (low_id, high_id) -> friendship row
        self._friendships: RelationIndex[Friendship] = RelationIndex()

    def _next_id(self, kind: str) -> int:
        return self._ids[kind].next()

    @staticmethod
    def _require(collection: Mapping[int, E], entity_id: int, entity: str) -> E:
        found = collection.get(entity_id)
        if found is None:
            raise NotFoundError(entity, entity_id)
        return found

    def _users_by_ids(self, user_ids: Iterable[int]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    def _feed_author_ids(self, user_id: int) -> set[int]:
        """Return the caller plus every account the caller follows."""
        return {user_id, *self._follows.rights_of(user_id)}

    def _set_movie_status(self, movie_id: int, status: str) -> Movie:
        movie = self._require(self._movies, movie_id, "Movie")
        updated = movie.model_copy(update={"status": status, "updated_at": self._now()})
        self._movies[movie_id] = updated
        logger.info("Movie %d status %s -> %s", movie_id, movie.status, status)
        return updated
