"""Models tracking content flagged for admin review."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from cinesocial.models.base import Entity

MODERATION_STATUS_PENDING = "pending"
MODERATION_STATUS_REVIEWED = "reviewed"
MODERATION_STATUS_ACTIONED = "actioned"

MODERATION_ACTION_APPROVE = "approve"
MODERATION_ACTION_REJECT = "reject"
MODERATION_ACTION_FLAG = "flag"

ModerationContentType = Literal["movie", "post", "comment"]
ModerationAction = Literal["approve", "reject", "flag"]


class ModerationQueueItem(Entity):
    """Content awaiting a moderator decision."""

    content_type: ModerationContentType
    content_id: int
    reason: str
    status: Literal["pending", "reviewed", "actioned"] = MODERATION_STATUS_PENDING
    moderator_id: int | None = None
    moderator_notes: str | None = None
    action: ModerationAction | None = None
    created_at: datetime
    updated_at: datetime | None = None
