"""Friend request input schemas."""

from pydantic import BaseModel, Field


class FriendRequestCreate(BaseModel):
    """Schema for sending a friend request."""

    receiver_id: int = Field(..., description="User receiving the request")
    message: str | None = None
