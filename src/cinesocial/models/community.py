"""Models for communities and their memberships."""

from datetime import datetime

from cinesocial.models.base import Entity

COMMUNITY_ROLE_OWNER = "owner"
COMMUNITY_ROLE_MODERATOR = "moderator"
COMMUNITY_ROLE_MEMBER = "member"


class Community(Entity):
    """Group of users sharing posts."""

    name: str
    description: str | None = None
    avatar_url: str | None = None
    cover_image_url: str | None = None
    # public, private, restricted
    type: str = "public"
    created_at: datetime
