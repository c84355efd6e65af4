"""Movie catalogue: uploads, engagement, reports, ratings and DMCA claims.

Counter rules maintained here:

- a new like adds one to ``movie.likes``; removing an existing like subtracts one
- adding a movie comment adds one to ``movie.comments``; deleting it subtracts one
- every recorded view adds one to ``movie.views``
- ratings recompute ``movie.average_rating`` and ``movie.total_ratings``

Decrements never take a counter below zero.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

from cinesocial.models import (
    DMCAClaim,
    Movie,
    MovieComment,
    MovieRating,
    MovieReport,
    WatchHistory,
)
from cinesocial.models.movie import (
    DMCA_STATUS_APPROVED,
    DMCA_STATUS_PENDING,
    MOVIE_STATUS_REMOVED_COPYRIGHT,
)
from cinesocial.schemas import (
    DMCAClaimCreate,
    MovieCommentCreate,
    MovieCreate,
    MovieRatingCreate,
    MovieReportCreate,
    WatchProgress,
)
from cinesocial.storage.base import StoreBase, floored, locked, merged, newest_first
from cinesocial.storage.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class MovieStore(StoreBase):
    """Operations on movies and everything hanging off them."""

    @locked
    async def create_movie(self, uploader_id: int, payload: MovieCreate) -> Movie:
        now = self._now()
        movie = Movie(
            id=self._next_id("movie"),
            uploader_id=uploader_id,
            title=payload.title,
            description=payload.description,
            video_url=payload.video_url,
            thumbnail_url=payload.thumbnail_url,
            trailer_url=payload.trailer_url,
            type=payload.type,
            season_number=payload.season_number,
            episode_number=payload.episode_number,
            duration=payload.duration,
            metadata=dict(payload.metadata or {}),
            copyright_status={"is_safe": True, "confidence": 1.0, "last_checked": now},
            created_at=now,
        )
        self._movies[movie.id] = movie
        logger.info("Movie %d uploaded by user %d", movie.id, uploader_id)
        return movie

    @locked
    async def get_movie(self, movie_id: int) -> Movie | None:
        return self._movies.get(movie_id)

    @locked
    async def get_movies(self, status: str | None = None) -> list[Movie]:
        movies = self._movies.values()
        if status:
            movies = [m for m in movies if m.status == status]
        return newest_first(movies)

    @locked
    async def update_movie_status(self, movie_id: int, status: str) -> Movie:
        return self._set_movie_status(movie_id, status)

    @locked
    async def update_movie_metadata(self, movie_id: int, metadata: Mapping[str, Any]) -> Movie:
        """Merge classifier output into the movie's metadata without interpreting it.

        A ``copyright_status`` entry is additionally merged into the movie's
        copyright status and stamped with the check time.
        """
        movie = self._require(self._movies, movie_id, "Movie")
        now = self._now()
        changes: dict[str, Any] = {
            "metadata": {**movie.metadata, **metadata},
            "updated_at": now,
        }
        copyright_status = metadata.get("copyright_status")
        if isinstance(copyright_status, Mapping):
            changes["copyright_status"] = {
                **movie.copyright_status.model_dump(),
                **copyright_status,
                "last_checked": now,
            }
        updated = merged(movie, changes)
        self._movies[movie_id] = updated
        return updated

    @locked
    async def delete_movie(self, movie_id: int) -> None:
        """Remove a movie with its likes, watchlist entries, comments and ratings."""
        if self._movies.pop(movie_id, None) is None:
            return
        self._movie_likes.discard_right(movie_id)
        self._watchlist.discard_right(movie_id)
        self._movie_ratings.discard_right(movie_id)
        for comment_id in [c.id for c in self._movie_comments.values() if c.movie_id == movie_id]:
            del self._movie_comments[comment_id]
            self._movie_comment_likes.discard_right(comment_id)
        logger.info("Deleted movie %d", movie_id)

    @locked
    async def increment_movie_views(self, movie_id: int) -> None:
        self._bump_movie(movie_id, "views", 1)

    def _bump_movie(self, movie_id: int, counter: str, delta: int) -> None:
        movie = self._movies.get(movie_id)
        if movie is None:
            return
        value = floored(getattr(movie, counter), delta)
        self._movies[movie_id] = movie.model_copy(update={counter: value})
        logger.debug("Movie %d %s -> %d", movie_id, counter, value)

    # Likes and watchlist

    @locked
    async def like_movie(self, user_id: int, movie_id: int) -> None:
        if movie_id in self._movies and self._movie_likes.add(user_id, movie_id, True):
            self._bump_movie(movie_id, "likes", 1)

    @locked
    async def unlike_movie(self, user_id: int, movie_id: int) -> None:
        if self._movie_likes.discard(user_id, movie_id) is not None:
            self._bump_movie(movie_id, "likes", -1)

    @locked
    async def add_to_watchlist(self, user_id: int, movie_id: int) -> None:
        self._watchlist.add(user_id, movie_id, True)

    @locked
    async def remove_from_watchlist(self, user_id: int, movie_id: int) -> None:
        self._watchlist.discard(user_id, movie_id)

    @locked
    async def get_watchlist(self, user_id: int) -> list[Movie]:
        return [self._movies[mid] for mid in self._watchlist.rights_of(user_id) if mid in self._movies]

    # Comments

    @locked
    async def add_movie_comment(self, user_id: int, payload: MovieCommentCreate) -> MovieComment:
        """Comment on an existing movie.

        Raises:
            NotFoundError: If the movie does not exist.
        """
        self._require(self._movies, payload.movie_id, "Movie")
        comment = MovieComment(
            id=self._next_id("movie_comment"),
            movie_id=payload.movie_id,
            user_id=user_id,
            content=payload.content,
            created_at=self._now(),
        )
        self._movie_comments[comment.id] = comment
        self._bump_movie(payload.movie_id, "comments", 1)
        return comment

    @locked
    async def get_movie_comments(self, movie_id: int) -> list[MovieComment]:
        return newest_first(c for c in self._movie_comments.values() if c.movie_id == movie_id)

    @locked
    async def delete_movie_comment(self, comment_id: int) -> None:
        comment = self._movie_comments.pop(comment_id, None)
        if comment is None:
            return
        self._movie_comment_likes.discard_right(comment_id)
        self._bump_movie(comment.movie_id, "comments", -1)

    @locked
    async def like_movie_comment(self, user_id: int, comment_id: int) -> None:
        if comment_id not in self._movie_comments:
            return
        if self._movie_comment_likes.add(user_id, comment_id, True):
            self._bump_movie_comment(comment_id, 1)

    @locked
    async def unlike_movie_comment(self, user_id: int, comment_id: int) -> None:
        if self._movie_comment_likes.discard(user_id, comment_id) is not None:
            self._bump_movie_comment(comment_id, -1)

    def _bump_movie_comment(self, comment_id: int, delta: int) -> None:
        comment = self._movie_comments.get(comment_id)
        if comment is not None:
            self._movie_comments[comment_id] = comment.model_copy(
                update={"likes": floored(comment.likes, delta)}
            )

    # Reports

    @locked
    async def report_movie(self, user_id: int, payload: MovieReportCreate) -> MovieReport:
        report = MovieReport(
            id=self._next_id("movie_report"),
            movie_id=payload.movie_id,
            user_id=user_id,
            reason=payload.reason,
            description=payload.description,
            created_at=self._now(),
        )
        self._movie_reports[report.id] = report
        return report

    @locked
    async def get_movie_reports(self, movie_id: int) -> list[MovieReport]:
        return newest_first(r for r in self._movie_reports.values() if r.movie_id == movie_id)

    @locked
    async def update_report_status(
        self, report_id: int, status: Literal["pending", "resolved", "rejected"]
    ) -> MovieReport:
        report = self._require(self._movie_reports, report_id, "Movie report")
        updated = merged(report, {"status": status, "updated_at": self._now()})
        self._movie_reports[report_id] = updated
        return updated

    # Ratings and watch history

    @locked
    async def rate_movie(
        self, user_id: int, movie_id: int, payload: MovieRatingCreate
    ) -> MovieRating:
        """Store the user's rating, replacing any earlier one, and refresh the average."""
        now = self._now()
        existing = self._movie_ratings.get(user_id, movie_id)
        if existing is None:
            rating = MovieRating(
                id=self._next_id("movie_rating"),
                movie_id=movie_id,
                user_id=user_id,
                rating=payload.rating,
                review=payload.review,
                created_at=now,
            )
        else:
            rating = existing.model_copy(
                update={"rating": payload.rating, "review": payload.review, "updated_at": now}
            )
        self._movie_ratings.set(user_id, movie_id, rating)
        self._refresh_rating(movie_id)
        return rating

    @locked
    async def get_movie_ratings(self, movie_id: int) -> list[MovieRating]:
        return newest_first(
            self._movie_ratings.get(uid, movie_id) for uid in self._movie_ratings.lefts_of(movie_id)
        )

    def _refresh_rating(self, movie_id: int) -> None:
        movie = self._movies.get(movie_id)
        if movie is None:
            return
        scores = [
            self._movie_ratings.get(uid, movie_id).rating
            for uid in self._movie_ratings.lefts_of(movie_id)
        ]
        average = round(sum(scores) / len(scores), 2) if scores else 0.0
        self._movies[movie_id] = movie.model_copy(
            update={"average_rating": average, "total_ratings": len(scores)}
        )

    @locked
    async def record_watch(
        self, user_id: int, movie_id: int, progress: WatchProgress
    ) -> WatchHistory:
        entry = WatchHistory(
            id=self._next_id("watch_history"),
            movie_id=movie_id,
            user_id=user_id,
            watched_at=self._now(),
            watch_duration=progress.watch_duration,
            completed=progress.completed,
            last_position=progress.last_position,
        )
        self._watch_history[entry.id] = entry
        return entry

    @locked
    async def get_watch_history(self, user_id: int) -> list[WatchHistory]:
        entries = [e for e in self._watch_history.values() if e.user_id == user_id]
        return sorted(entries, key=lambda e: (e.watched_at, e.id), reverse=True)

    # DMCA claims

    @locked
    async def create_dmca_claim(self, payload: DMCAClaimCreate) -> DMCAClaim:
        claim = DMCAClaim(
            id=self._next_id("dmca_claim"),
            movie_id=payload.movie_id,
            claimant_email=payload.claimant_email,
            description=payload.description,
            evidence=payload.evidence,
            created_at=self._now(),
        )
        self._dmca_claims[claim.id] = claim
        logger.info("DMCA claim %d filed against movie %d", claim.id, claim.movie_id)
        return claim

    @locked
    async def get_dmca_claim(self, claim_id: int) -> DMCAClaim | None:
        return self._dmca_claims.get(claim_id)

    @locked
    async def update_dmca_claim_status(
        self,
        claim_id: int,
        status: Literal["approved", "rejected"],
        response_message: str | None = None,
    ) -> DMCAClaim:
        """Decide a pending claim; approval takes the movie down for copyright.

        Raises:
            NotFoundError: If the claim does not exist.
            InvalidTransitionError: If the claim was already decided.
        """
        claim = self._require(self._dmca_claims, claim_id, "DMCA claim")
        if claim.status != DMCA_STATUS_PENDING:
            raise InvalidTransitionError("DMCA claim", claim_id, claim.status, status)
        updated = merged(
            claim,
            {"status": status, "response_message": response_message, "updated_at": self._now()},
        )
        self._dmca_claims[claim_id] = updated
        logger.info("DMCA claim %d %s", claim_id, status)

        if status == DMCA_STATUS_APPROVED and claim.movie_id in self._movies:
            self._set_movie_status(claim.movie_id, MOVIE_STATUS_REMOVED_COPYRIGHT)
        return updated

    @locked
    async def get_movie_dmca_claims(self, movie_id: int) -> list[DMCAClaim]:
        return newest_first(c for c in self._dmca_claims.values() if c.movie_id == movie_id)

    @locked
    async def get_pending_dmca_claims(self) -> list[DMCAClaim]:
        return newest_first(
            c for c in self._dmca_claims.values() if c.status == DMCA_STATUS_PENDING
        )
