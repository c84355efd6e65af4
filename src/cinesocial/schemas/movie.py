"""Movie catalogue input schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class MovieCreate(BaseModel):
    """Schema for uploading a movie or series episode."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    type: Literal["movie", "series"] = "movie"
    season_number: int | None = None
    episode_number: int | None = None
    duration: int = Field(0, ge=0, description="Length in seconds")
    metadata: dict[str, Any] | None = None


class MovieCommentCreate(BaseModel):
    """Schema for commenting on a movie."""

    movie_id: int
    content: str = Field(..., min_length=1)


class MovieReportCreate(BaseModel):
    """Schema for reporting a movie."""

    movie_id: int
    reason: str = Field(..., min_length=1)
    description: str | None = None


class MovieRatingCreate(BaseModel):
    """Schema for rating a movie."""

    rating: int = Field(..., ge=1, le=5, description="Star rating")
    review: str | None = None


class WatchProgress(BaseModel):
    """Schema describing a finished or interrupted viewing session."""

    watch_duration: int = Field(..., ge=0, description="Seconds watched")
    completed: bool = False
    last_position: int = Field(0, ge=0, description="Playback position in seconds")


class DMCAClaimCreate(BaseModel):
    """Schema for filing a copyright takedown claim."""

    movie_id: int
    claimant_email: str
    description: str
    evidence: str
