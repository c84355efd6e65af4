"""Models for posts, comments and stories."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from cinesocial.models.base import Entity


class Attachment(BaseModel):
    """Media attached to a post."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image", "video", "audio", "link"]
    url: str
    thumbnail_url: str | None = None


class Post(Entity):
    """Primary social content entity.

    ``likes``, ``shares`` and ``comments`` are denormalized counters kept in
    step with the like index and the comment collection.
    """

    user_id: int
    content: str
    attachments: list[Attachment] = Field(default_factory=list)
    # public, friends, private
    visibility: str = "public"
    community_id: int | None = None
    hashtags: list[str] = Field(default_factory=list)
    location: str | None = None
    likes: int = 0
    shares: int = 0
    comments: int = 0
    created_at: datetime
    edited_at: datetime | None = None
    updated_at: datetime | None = None


class Comment(Entity):
    """Comment on a post; ``parent_id`` links replies into threads."""

    post_id: int
    user_id: int
    parent_id: int | None = None
    content: str
    likes: int = 0
    created_at: datetime
    edited_at: datetime | None = None
    updated_at: datetime | None = None


class Story(Entity):
    """Short-lived media item visible to followers until ``expires_at``."""

    user_id: int
    media_url: str
    # image, video
    media_type: str
    caption: str | None = None
    viewers: int = 0
    created_at: datetime
    expires_at: datetime
