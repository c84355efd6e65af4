"""Models for direct and group conversations."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from cinesocial.models.base import Entity


class MessageAttachment(BaseModel):
    """File shared inside a conversation."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image", "video", "audio", "file"]
    url: str
    name: str | None = None


class Conversation(Entity):
    """A set of users exchanging messages."""

    type: Literal["direct", "group"]
    name: str | None = None
    member_ids: list[int] = Field(default_factory=list)
    created_at: datetime
    last_message_at: datetime


class Message(Entity):
    """A single message inside a conversation."""

    conversation_id: int
    user_id: int
    content: str
    attachments: list[MessageAttachment] = Field(default_factory=list)
    created_at: datetime
    edited_at: datetime | None = None
    is_deleted: bool = False
