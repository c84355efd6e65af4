"""Tests for the movie catalogue and DMCA claims."""

import pytest

from cinesocial.schemas import (
    DMCAClaimCreate,
    MovieCommentCreate,
    MovieCreate,
    MovieRatingCreate,
    MovieReportCreate,
    WatchProgress,
)
from cinesocial.storage import InvalidTransitionError, NotFoundError


def _movie(title: str = "Night Train") -> MovieCreate:
    return MovieCreate(title=title, video_url=f"https://cdn.example.com/{title}.mp4", duration=5400)


@pytest.mark.asyncio
async def test_create_movie_defaults(store, make_users) -> None:
    """New uploads wait for moderation with zeroed counters."""
    (alice,) = await make_users("alice")

    movie = await store.create_movie(alice.id, _movie())

    assert movie.status == "pending"
    assert (movie.views, movie.likes, movie.comments) == (0, 0, 0)
    assert movie.metadata == {}
    assert movie.copyright_status.is_safe is True
    assert movie.updated_at is None


@pytest.mark.asyncio
async def test_get_movies_filters_by_status(store, make_users) -> None:
    """Listing can be narrowed to one status."""
    (alice,) = await make_users("alice")
    first = await store.create_movie(alice.id, _movie("one"))
    second = await store.create_movie(alice.id, _movie("two"))
    await store.update_movie_status(first.id, "approved")

    assert [m.id for m in await store.get_movies()] == [second.id, first.id]
    assert [m.id for m in await store.get_movies("approved")] == [first.id]
    with pytest.raises(NotFoundError):
        await store.update_movie_status(999, "approved")


@pytest.mark.asyncio
async def test_movie_likes_never_go_negative(store, make_users) -> None:
    """Repeated unlikes keep likes at zero."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())

    await store.like_movie(bob.id, movie.id)
    await store.like_movie(bob.id, movie.id)
    assert (await store.get_movie(movie.id)).likes == 1

    for _ in range(3):
        await store.unlike_movie(bob.id, movie.id)
        await store.unlike_movie(alice.id, movie.id)
    assert (await store.get_movie(movie.id)).likes == 0


@pytest.mark.asyncio
async def test_movie_comment_counter(store, make_users) -> None:
    """movie.comments tracks live comment rows."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())
    first = await store.add_movie_comment(bob.id, MovieCommentCreate(movie_id=movie.id, content="a"))
    await store.add_movie_comment(bob.id, MovieCommentCreate(movie_id=movie.id, content="b"))

    await store.delete_movie_comment(first.id)
    await store.delete_movie_comment(first.id)

    assert (await store.get_movie(movie.id)).comments == 1
    assert len(await store.get_movie_comments(movie.id)) == 1


@pytest.mark.asyncio
async def test_movie_comment_likes(store, make_users) -> None:
    """Movie comment likes are idempotent and floored."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())
    comment = await store.add_movie_comment(
        alice.id, MovieCommentCreate(movie_id=movie.id, content="a")
    )

    await store.like_movie_comment(bob.id, comment.id)
    await store.like_movie_comment(bob.id, comment.id)
    await store.unlike_movie_comment(alice.id, comment.id)
    [stored] = await store.get_movie_comments(movie.id)
    assert stored.likes == 1

    await store.unlike_movie_comment(bob.id, comment.id)
    await store.unlike_movie_comment(bob.id, comment.id)
    [stored] = await store.get_movie_comments(movie.id)
    assert stored.likes == 0


@pytest.mark.asyncio
async def test_views_increment(store, make_users) -> None:
    """Every view counts."""
    (alice,) = await make_users("alice")
    movie = await store.create_movie(alice.id, _movie())

    for _ in range(3):
        await store.increment_movie_views(movie.id)
    await store.increment_movie_views(999)

    assert (await store.get_movie(movie.id)).views == 3


@pytest.mark.asyncio
async def test_metadata_is_persisted_verbatim(store, make_users) -> None:
    """Classifier output merges into metadata and the copyright status."""
    (alice,) = await make_users("alice")
    movie = await store.create_movie(
        alice.id,
        MovieCreate(title="t", video_url="u", metadata={"language": "en"}),
    )

    updated = await store.update_movie_metadata(
        movie.id,
        {
            "genre": ["drama"],
            "tags": ["rain", "city"],
            "copyright_status": {"is_safe": False, "confidence": 0.3, "reason": "match"},
        },
    )

    assert updated.metadata["language"] == "en"
    assert updated.metadata["genre"] == ["drama"]
    assert updated.metadata["tags"] == ["rain", "city"]
    assert updated.copyright_status.is_safe is False
    assert updated.copyright_status.confidence == 0.3
    assert updated.copyright_status.reason == "match"
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_watchlist(store, make_users) -> None:
    """Watchlist add is idempotent and removal is a no-op when absent."""
    (alice,) = await make_users("alice")
    one = await store.create_movie(alice.id, _movie("one"))
    two = await store.create_movie(alice.id, _movie("two"))

    await store.add_to_watchlist(alice.id, two.id)
    await store.add_to_watchlist(alice.id, one.id)
    await store.add_to_watchlist(alice.id, two.id)
    assert [m.id for m in await store.get_watchlist(alice.id)] == [two.id, one.id]

    await store.remove_from_watchlist(alice.id, two.id)
    await store.remove_from_watchlist(alice.id, two.id)
    assert [m.id for m in await store.get_watchlist(alice.id)] == [one.id]


@pytest.mark.asyncio
async def test_ratings_replace_and_average(store, make_users) -> None:
    """One rating per user per movie; the average follows."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())

    first = await store.rate_movie(alice.id, movie.id, MovieRatingCreate(rating=2))
    await store.rate_movie(bob.id, movie.id, MovieRatingCreate(rating=5))
    again = await store.rate_movie(alice.id, movie.id, MovieRatingCreate(rating=4, review="better"))

    assert again.id == first.id
    assert again.review == "better"
    stored = await store.get_movie(movie.id)
    assert stored.total_ratings == 2
    assert stored.average_rating == 4.5
    assert len(await store.get_movie_ratings(movie.id)) == 2


@pytest.mark.asyncio
async def test_watch_history_newest_first(store, make_users) -> None:
    """Viewing sessions are recorded per user."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())

    first = await store.record_watch(alice.id, movie.id, WatchProgress(watch_duration=60))
    second = await store.record_watch(
        alice.id, movie.id, WatchProgress(watch_duration=5400, completed=True, last_position=5400)
    )
    await store.record_watch(bob.id, movie.id, WatchProgress(watch_duration=10))

    history = await store.get_watch_history(alice.id)
    assert [h.id for h in history] == [second.id, first.id]
    assert history[0].completed is True


@pytest.mark.asyncio
async def test_reports(store, make_users) -> None:
    """Reports start pending and can be resolved."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())

    report = await store.report_movie(bob.id, MovieReportCreate(movie_id=movie.id, reason="spam"))
    assert report.status == "pending"
    assert report.description is None

    resolved = await store.update_report_status(report.id, "resolved")
    assert resolved.status == "resolved"
    assert resolved.updated_at is not None
    assert [r.status for r in await store.get_movie_reports(movie.id)] == ["resolved"]
    with pytest.raises(NotFoundError):
        await store.update_report_status(999, "rejected")


@pytest.mark.asyncio
async def test_delete_movie_cascades(store, make_users) -> None:
    """Deleting a movie drops its likes, watchlist entries, comments and ratings."""
    alice, bob = await make_users("alice", "bob")
    movie = await store.create_movie(alice.id, _movie())
    await store.like_movie(bob.id, movie.id)
    await store.add_to_watchlist(bob.id, movie.id)
    await store.add_movie_comment(bob.id, MovieCommentCreate(movie_id=movie.id, content="a"))
    await store.rate_movie(bob.id, movie.id, MovieRatingCreate(rating=3))

    await store.delete_movie(movie.id)
    await store.delete_movie(movie.id)

    assert await store.get_movie(movie.id) is None
    assert await store.get_watchlist(bob.id) == []
    assert await store.get_movie_comments(movie.id) == []
    assert await store.get_movie_ratings(movie.id) == []


@pytest.mark.asyncio
async def test_approved_dmca_claim_removes_movie(store, make_users) -> None:
    """Approval cascades to the distinct removed_copyright status."""
    (alice,) = await make_users("alice")
    movie = await store.create_movie(alice.id, _movie())
    await store.update_movie_status(movie.id, "approved")
    claim = await store.create_dmca_claim(
        DMCAClaimCreate(
            movie_id=movie.id,
            claimant_email="legal@studio.example",
            description="Our film",
            evidence="https://studio.example/proof",
        )
    )
    assert [c.id for c in await store.get_pending_dmca_claims()] == [claim.id]

    decided = await store.update_dmca_claim_status(claim.id, "approved", "Taken down")

    assert decided.status == "approved"
    assert decided.response_message == "Taken down"
    assert (await store.get_movie(movie.id)).status == "removed_copyright"
    assert await store.get_pending_dmca_claims() == []
    assert [c.id for c in await store.get_movie_dmca_claims(movie.id)] == [claim.id]


@pytest.mark.asyncio
async def test_rejected_dmca_claim_leaves_movie_alone(store, make_users) -> None:
    """Rejection does not touch the movie, and a decided claim stays decided."""
    (alice,) = await make_users("alice")
    movie = await store.create_movie(alice.id, _movie())
    claim = await store.create_dmca_claim(
        DMCAClaimCreate(movie_id=movie.id, claimant_email="x@y.z", description="d", evidence="e")
    )

    await store.update_dmca_claim_status(claim.id, "rejected")

    assert (await store.get_movie(movie.id)).status == "pending"
    with pytest.raises(InvalidTransitionError):
        await store.update_dmca_claim_status(claim.id, "approved")
    with pytest.raises(NotFoundError):
        await store.update_dmca_claim_status(999, "approved")


@pytest.mark.asyncio
async def test_engagement_on_missing_movie_leaves_no_rows(store, make_users) -> None:
    """Comments and likes aimed at an unknown movie never surface on a later upload."""
    alice, bob = await make_users("alice", "bob")

    with pytest.raises(NotFoundError):
        await store.add_movie_comment(bob.id, MovieCommentCreate(movie_id=1, content="early"))
    await store.like_movie(bob.id, 1)
    await store.like_movie_comment(bob.id, 1)
    movie = await store.create_movie(alice.id, _movie())

    assert movie.id == 1
    assert (movie.likes, movie.comments) == (0, 0)
    assert await store.get_movie_comments(movie.id) == []
    await store.unlike_movie(bob.id, movie.id)
    assert (await store.get_movie(movie.id)).likes == 0
