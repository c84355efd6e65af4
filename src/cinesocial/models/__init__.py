"""Entity models stored by CineSocial."""

from .base import Entity
from .community import Community
from .friendship import FriendRequest, Friendship
from .message import Conversation, Message, MessageAttachment
from .moderation import ModerationQueueItem
from .movie import (
    CopyrightStatus,
    DMCAClaim,
    Movie,
    MovieComment,
    MovieRating,
    MovieReport,
    WatchHistory,
)
from .post import Attachment, Comment, Post, Story
from .user import User, UserSuggestion

__all__ = [
    "Entity",
    "Community",
    "FriendRequest", "Friendship",
    "Conversation", "Message", "MessageAttachment",
    "ModerationQueueItem",
    "CopyrightStatus", "DMCAClaim", "Movie", "MovieComment", "MovieRating",
    "MovieReport", "WatchHistory",
    "Attachment", "Comment", "Post", "Story",
    "User", "UserSuggestion",
]
