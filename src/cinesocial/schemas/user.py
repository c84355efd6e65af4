"""User-related input schemas."""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a new user.

    ``password`` is expected to be hashed by the authentication layer already.
    """

    username: str = Field(..., min_length=1, description="Unique login name")
    email: str = Field(..., min_length=3, description="Unique contact email")
    password: str = Field(..., description="Password hash")
    role: str | None = Field(None, description="user, moderator, content_manager or admin")
    permissions: list[str] | None = Field(None, description="Explicit permission strings")
    is_admin: bool = False
    display_name: str | None = None
    avatar_url: str | None = None
    google_id: str | None = None


class UserProfileUpdate(BaseModel):
    """Schema for the profile fields a user may edit."""

    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    location: str | None = None
    website: str | None = None
