"""Post, comment and story input schemas."""

from pydantic import BaseModel, Field

from cinesocial.models.post import Attachment


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    content: str = Field(..., min_length=1, description="Post body")
    attachments: list[Attachment] | None = Field(None, description="Attached media")
    visibility: str | None = Field(None, description="public, friends or private")
    community_id: int | None = Field(None, description="Community the post belongs to")
    hashtags: list[str] | None = None
    location: str | None = None


class PostUpdate(BaseModel):
    """Schema for editing an existing post."""

    content: str | None = Field(None, min_length=1)
    attachments: list[Attachment] | None = None
    visibility: str | None = None
    hashtags: list[str] | None = None
    location: str | None = None


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    content: str = Field(..., min_length=1, description="Comment body")
    parent_id: int | None = Field(None, description="Parent comment ID for replies")


class StoryCreate(BaseModel):
    """Schema for publishing a story."""

    media_url: str
    media_type: str = Field(..., description="image or video")
    caption: str | None = None
