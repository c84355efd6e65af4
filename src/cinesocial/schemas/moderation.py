"""Moderation queue input schemas."""

from pydantic import BaseModel, Field

from cinesocial.models.moderation import ModerationContentType


class ModerationQueueCreate(BaseModel):
    """Schema for flagging content for review."""

    content_type: ModerationContentType
    content_id: int
    reason: str = Field(..., min_length=1)
