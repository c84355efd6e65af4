"""Community input schemas."""

from pydantic import BaseModel, Field


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    type: str | None = Field(None, description="public, private or restricted")
