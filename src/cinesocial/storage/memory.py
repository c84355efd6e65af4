"""The in-memory entity store."""

from __future__ import annotations

from cinesocial.storage.friends import FriendStore
from cinesocial.storage.messaging import MessagingStore
from cinesocial.storage.moderation import ModerationStore
from cinesocial.storage.movies import MovieStore
from cinesocial.storage.posts import PostStore
from cinesocial.storage.users import UserStore

__all__ = ["MemStorage"]


class MemStorage(
    UserStore,
    PostStore,
    MessagingStore,
    MovieStore,
    FriendStore,
    ModerationStore,
):
    """Authoritative in-process holder of every CineSocial entity.

    Construct one per process (or per test) and hand it to collaborators;
    there is no module-level instance. Every operation is a coroutine that
    completes without suspending and returns full entity snapshots.
    """
