"""Models for the streaming catalogue and everything attached to a movie."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from cinesocial.models.base import Entity

# Movie.status values. removed_copyright is reachable only through an approved DMCA claim.
MOVIE_STATUS_PENDING = "pending"
MOVIE_STATUS_APPROVED = "approved"
MOVIE_STATUS_REJECTED = "rejected"
MOVIE_STATUS_REMOVED_COPYRIGHT = "removed_copyright"

DMCA_STATUS_PENDING = "pending"
DMCA_STATUS_APPROVED = "approved"
DMCA_STATUS_REJECTED = "rejected"

REPORT_STATUS_PENDING = "pending"


class CopyrightStatus(BaseModel):
    """Outcome of the latest automated copyright check."""

    model_config = ConfigDict(frozen=True, extra="allow")

    is_safe: bool = True
    confidence: float = 1.0
    last_checked: datetime | None = None
    potential_matches: list[str] | None = None
    reason: str | None = None


class Movie(Entity):
    """Uploaded movie or series episode awaiting or past moderation."""

    uploader_id: int
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    type: Literal["movie", "series"] = "movie"
    season_number: int | None = None
    episode_number: int | None = None
    # in seconds
    duration: int = 0
    # Stored verbatim; the classifier owns its shape.
    metadata: dict[str, Any] = Field(default_factory=dict)
    copyright_status: CopyrightStatus = Field(default_factory=CopyrightStatus)
    status: str = MOVIE_STATUS_PENDING
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    average_rating: float = 0.0
    total_ratings: int = 0
    created_at: datetime
    updated_at: datetime | None = None


class MovieComment(Entity):
    """Comment left on a movie page."""

    movie_id: int
    user_id: int
    content: str
    likes: int = 0
    created_at: datetime
    updated_at: datetime | None = None


class MovieReport(Entity):
    """User report against a movie."""

    movie_id: int
    user_id: int
    reason: str
    description: str | None = None
    status: Literal["pending", "resolved", "rejected"] = REPORT_STATUS_PENDING
    created_at: datetime
    updated_at: datetime | None = None


class MovieRating(Entity):
    """One user's 1-5 star rating of a movie."""

    movie_id: int
    user_id: int
    rating: int
    review: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class WatchHistory(Entity):
    """Record of a viewing session."""

    movie_id: int
    user_id: int
    watched_at: datetime
    # in seconds
    watch_duration: int
    completed: bool = False
    last_position: int = 0


class DMCAClaim(Entity):
    """Copyright takedown claim against a movie."""

    movie_id: int
    claimant_email: str
    description: str
    evidence: str
    status: Literal["pending", "approved", "rejected"] = DMCA_STATUS_PENDING
    response_message: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
