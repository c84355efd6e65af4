"""Input schemas accepted by the CineSocial store."""

from .community import CommunityCreate
from .friendship import FriendRequestCreate
from .message import MessageCreate
from .moderation import ModerationQueueCreate
from .movie import (
    DMCAClaimCreate,
    MovieCommentCreate,
    MovieCreate,
    MovieRatingCreate,
    MovieReportCreate,
    WatchProgress,
)
from .post import CommentCreate, PostCreate, PostUpdate, StoryCreate
from .user import UserCreate, UserProfileUpdate

__all__ = [
    "CommunityCreate",
    "FriendRequestCreate",
    "MessageCreate",
    "ModerationQueueCreate",
    "DMCAClaimCreate", "MovieCommentCreate", "MovieCreate", "MovieRatingCreate",
    "MovieReportCreate", "WatchProgress",
    "CommentCreate", "PostCreate", "PostUpdate", "StoryCreate",
    "UserCreate", "UserProfileUpdate",
]
