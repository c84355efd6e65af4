"""Messaging input schemas."""

from pydantic import BaseModel, Field

from cinesocial.models.message import MessageAttachment


class MessageCreate(BaseModel):
    """Schema for sending a message to a conversation."""

    content: str = Field(..., min_length=1)
    attachments: list[MessageAttachment] | None = None
