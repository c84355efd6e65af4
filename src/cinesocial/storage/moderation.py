"""Admin moderation queue and console statistics."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from cinesocial.models import ModerationQueueItem
from cinesocial.models.moderation import (
    MODERATION_ACTION_APPROVE,
    MODERATION_ACTION_REJECT,
    MODERATION_STATUS_ACTIONED,
    MODERATION_STATUS_PENDING,
    MODERATION_STATUS_REVIEWED,
    ModerationAction,
)
from cinesocial.models.movie import (
    DMCA_STATUS_PENDING,
    MOVIE_STATUS_APPROVED,
    MOVIE_STATUS_REJECTED,
    MOVIE_STATUS_REMOVED_COPYRIGHT,
)
from cinesocial.schemas import ModerationQueueCreate
from cinesocial.storage.base import StoreBase, locked, merged, newest_first
from cinesocial.storage.errors import InvalidTransitionError

logger = logging.getLogger(__name__)

# Movie status applied when a queued movie is decided.
_MOVIE_STATUS_BY_ACTION = {
    MODERATION_ACTION_APPROVE: MOVIE_STATUS_APPROVED,
    MODERATION_ACTION_REJECT: MOVIE_STATUS_REJECTED,
}


class ModerationStore(StoreBase):
    """Operations backing the admin console."""

    @locked
    async def create_moderation_item(self, payload: ModerationQueueCreate) -> ModerationQueueItem:
        item = ModerationQueueItem(
            id=self._next_id("moderation_item"),
            content_type=payload.content_type,
            content_id=payload.content_id,
            reason=payload.reason,
            created_at=self._now(),
        )
        self._moderation_queue[item.id] = item
        logger.info(
            "Queued %s %d for moderation: %s", item.content_type, item.content_id, item.reason
        )
        return item

    @locked
    async def get_moderation_item(self, item_id: int) -> ModerationQueueItem | None:
        return self._moderation_queue.get(item_id)

    @locked
    async def get_moderation_queue(self, status: str | None = None) -> list[ModerationQueueItem]:
        items = self._moderation_queue.values()
        if status:
            items = [i for i in items if i.status == status]
        return newest_first(items)

    @locked
    async def resolve_moderation_item(
        self,
        item_id: int,
        *,
        moderator_id: int,
        action: ModerationAction,
        notes: str | None = None,
    ) -> ModerationQueueItem:
        """Record a moderator decision on a pending item.

        Approval marks the item reviewed; rejecting or flagging marks it
        actioned. Decisions on movies also set the movie's status unless it
        was removed for copyright.

        Raises:
            NotFoundError: If the item does not exist.
            InvalidTransitionError: If the item was already decided.
        """
        item = self._require(self._moderation_queue, item_id, "Moderation item")
        status = (
            MODERATION_STATUS_REVIEWED
            if action == MODERATION_ACTION_APPROVE
            else MODERATION_STATUS_ACTIONED
        )
        if item.status != MODERATION_STATUS_PENDING:
            raise InvalidTransitionError("Moderation item", item_id, item.status, status)

        updated = merged(
            item,
            {
                "status": status,
                "action": action,
                "moderator_id": moderator_id,
                "moderator_notes": notes,
                "updated_at": self._now(),
            },
        )
        self._moderation_queue[item_id] = updated
        logger.info("Moderator %d %s %s %d", moderator_id, action, item.content_type, item.content_id)

        movie_status = _MOVIE_STATUS_BY_ACTION.get(action)
        if item.content_type == "movie" and movie_status:
            movie = self._movies.get(item.content_id)
            # Copyright takedowns are only undone through the movie status API.
            if movie is not None and movie.status != MOVIE_STATUS_REMOVED_COPYRIGHT:
                self._set_movie_status(movie.id, movie_status)
            elif movie is not None:
                logger.info("Movie %d stays removed for copyright", movie.id)
        return updated

    @locked
    async def get_stats(self) -> dict[str, Any]:
        """Return live counts for the admin dashboard."""
        return {
            "total_users": len(self._users),
            "total_posts": len(self._posts),
            "total_stories": len(self._stories),
            "movies_by_status": dict(Counter(m.status for m in self._movies.values())),
            "pending_moderation": sum(
                1 for i in self._moderation_queue.values() if i.status == MODERATION_STATUS_PENDING
            ),
            "pending_dmca_claims": sum(
                1 for c in self._dmca_claims.values() if c.status == DMCA_STATUS_PENDING
            ),
        }
