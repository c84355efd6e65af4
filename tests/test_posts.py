"""Tests for posts, comments, likes and reactions."""

import pytest

from cinesocial.schemas import CommentCreate, PostCreate, PostUpdate
from cinesocial.storage import NotFoundError


@pytest.mark.asyncio
async def test_create_post_defaults(store, make_users) -> None:
    """Optional fields become explicit defaults and counters start at zero."""
    (alice,) = await make_users("alice")

    post = await store.create_post(alice.id, PostCreate(content="hello"))

    assert post.user_id == alice.id
    assert post.attachments == []
    assert post.hashtags == []
    assert post.location is None
    assert post.visibility == "public"
    assert (post.likes, post.shares, post.comments) == (0, 0, 0)


@pytest.mark.asyncio
async def test_like_then_unlike_scenario(store, make_users) -> None:
    """A likes once, B likes twice, unlikes restore the count."""
    alice, bob = await make_users("alice", "bob")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    await store.like_post(bob.id, post.id)
    await store.like_post(bob.id, post.id)
    assert (await store.get_post(post.id)).likes == 1

    await store.unlike_post(bob.id, post.id)
    assert (await store.get_post(post.id)).likes == 0

    await store.unlike_post(bob.id, post.id)
    assert (await store.get_post(post.id)).likes == 0
    assert await store.has_liked_post(bob.id, post.id) is False


@pytest.mark.asyncio
async def test_share_increments_shares(store, make_users) -> None:
    """Sharing is a plain counter."""
    (alice,) = await make_users("alice")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    await store.share_post(alice.id, post.id)
    await store.share_post(alice.id, post.id)

    assert (await store.get_post(post.id)).shares == 2


@pytest.mark.asyncio
async def test_comment_counter_matches_comment_rows(store, make_users) -> None:
    """post.comments equals the number of live comments after creates and deletes."""
    alice, bob = await make_users("alice", "bob")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    created = [
        await store.create_comment(bob.id, post.id, CommentCreate(content=f"c{i}"))
        for i in range(3)
    ]
    await store.delete_comment(created[1].id)
    await store.delete_comment(created[1].id)

    live = await store.get_post_comments(post.id)
    assert (await store.get_post(post.id)).comments == len(live) == 2
    assert [c.id for c in live] == [created[2].id, created[0].id]


@pytest.mark.asyncio
async def test_threaded_replies_are_oldest_first(store, make_users) -> None:
    """Replies to a comment come back in conversation order."""
    (alice,) = await make_users("alice")
    post = await store.create_post(alice.id, PostCreate(content="hello"))
    root = await store.create_comment(alice.id, post.id, CommentCreate(content="root"))
    first = await store.create_comment(
        alice.id, post.id, CommentCreate(content="r1", parent_id=root.id)
    )
    second = await store.create_comment(
        alice.id, post.id, CommentCreate(content="r2", parent_id=root.id)
    )

    assert root.parent_id is None
    assert [c.id for c in await store.get_threaded_comments(root.id)] == [first.id, second.id]
    assert await store.get_comment(first.id) == first


@pytest.mark.asyncio
async def test_comment_likes_are_idempotent(store, make_users) -> None:
    """Comment likes use their own index, separate from post likes."""
    alice, bob = await make_users("alice", "bob")
    post = await store.create_post(alice.id, PostCreate(content="hello"))
    comment = await store.create_comment(alice.id, post.id, CommentCreate(content="c"))

    await store.like_comment(bob.id, comment.id)
    await store.like_comment(bob.id, comment.id)
    assert (await store.get_comment(comment.id)).likes == 1
    assert (await store.get_post(post.id)).likes == 0

    await store.unlike_comment(bob.id, comment.id)
    await store.unlike_comment(bob.id, comment.id)
    assert (await store.get_comment(comment.id)).likes == 0


@pytest.mark.asyncio
async def test_feed_contains_own_and_followed_posts_only(store, make_users) -> None:
    """The feed is own posts plus followed authors, newest first."""
    alice, bob, carol = await make_users("alice", "bob", "carol")
    a1 = await store.create_post(alice.id, PostCreate(content="a1"))
    b1 = await store.create_post(bob.id, PostCreate(content="b1"))
    await store.create_post(carol.id, PostCreate(content="c1"))
    a2 = await store.create_post(alice.id, PostCreate(content="a2"))

    await store.follow_user(alice.id, bob.id)

    feed = await store.get_feed_posts(alice.id)
    assert [p.id for p in feed] == [a2.id, b1.id, a1.id]
    assert all(p.user_id != carol.id for p in feed)
    assert [p.id for p in await store.get_user_posts(alice.id)] == [a2.id, a1.id]


@pytest.mark.asyncio
async def test_update_post_refreshes_timestamps(store, make_users) -> None:
    """Edits merge and stamp edited_at/updated_at."""
    (alice,) = await make_users("alice")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    updated = await store.update_post(post.id, PostUpdate(content="edited"))

    assert updated.content == "edited"
    assert updated.edited_at is not None
    assert updated.updated_at == updated.edited_at
    with pytest.raises(NotFoundError):
        await store.update_post(999, PostUpdate(content="x"))


@pytest.mark.asyncio
async def test_delete_post_cascades(store, make_users) -> None:
    """Deleting a post removes its comments, likes and reactions."""
    alice, bob = await make_users("alice", "bob")
    post = await store.create_post(alice.id, PostCreate(content="hello"))
    comment = await store.create_comment(bob.id, post.id, CommentCreate(content="c"))
    await store.like_post(bob.id, post.id)
    await store.add_reaction(bob.id, post.id, "love")

    await store.delete_post(post.id)
    await store.delete_post(post.id)

    assert await store.get_post(post.id) is None
    assert await store.get_comment(comment.id) is None
    assert await store.has_liked_post(bob.id, post.id) is False
    assert await store.get_post_reactions(post.id) == {}


@pytest.mark.asyncio
async def test_reactions_accumulate_by_default(store, make_users) -> None:
    """Without exclusivity a user can hold several reaction types."""
    alice, bob = await make_users("alice", "bob")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    await store.add_reaction(alice.id, post.id, "like")
    await store.add_reaction(alice.id, post.id, "like")
    await store.add_reaction(alice.id, post.id, "love")
    await store.add_reaction(bob.id, post.id, "like")

    assert await store.get_post_reactions(post.id) == {"like": 2, "love": 1}
    assert await store.get_user_reactions(alice.id, post.id) == ["like", "love"]

    await store.remove_reaction(alice.id, post.id, "like")
    assert await store.get_user_reactions(alice.id, post.id) == ["love"]

    await store.remove_reaction(alice.id, post.id)
    await store.remove_reaction(alice.id, post.id)
    assert await store.get_post_reactions(post.id) == {"like": 1}


@pytest.mark.asyncio
async def test_exclusive_reactions_replace_previous(store, make_users) -> None:
    """With exclusivity enabled the latest reaction wins."""
    store.settings.exclusive_reactions = True
    (alice,) = await make_users("alice")
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    await store.add_reaction(alice.id, post.id, "like")
    await store.add_reaction(alice.id, post.id, "angry")

    assert await store.get_user_reactions(alice.id, post.id) == ["angry"]
    assert await store.get_post_reactions(post.id) == {"angry": 1}


@pytest.mark.asyncio
async def test_update_post_ignores_explicit_none(store, make_users) -> None:
    """None leaves required fields unchanged but still clears the location."""
    (alice,) = await make_users("alice")
    post = await store.create_post(
        alice.id,
        PostCreate(content="hello", visibility="friends", hashtags=["films"], location="Paris"),
    )

    updated = await store.update_post(
        post.id,
        PostUpdate(content=None, attachments=None, visibility=None, hashtags=None, location=None),
    )

    assert updated.content == "hello"
    assert updated.attachments == []
    assert updated.visibility == "friends"
    assert updated.hashtags == ["films"]
    assert updated.location is None
    assert updated.edited_at is not None


@pytest.mark.asyncio
async def test_engagement_on_missing_post_leaves_no_rows(store, make_users) -> None:
    """Comments and likes aimed at an unknown post never surface on a later post."""
    alice, bob = await make_users("alice", "bob")

    with pytest.raises(NotFoundError):
        await store.create_comment(bob.id, 1, CommentCreate(content="early"))
    await store.like_post(bob.id, 1)
    await store.like_comment(bob.id, 1)
    post = await store.create_post(alice.id, PostCreate(content="hello"))

    assert post.id == 1
    assert post.comments == 0
    assert await store.get_post_comments(post.id) == []
    assert await store.has_liked_post(bob.id, post.id) is False


@pytest.mark.asyncio
async def test_post_ids_are_not_reused_after_delete(store, make_users) -> None:
    """Deleting the newest post does not free its id."""
    (alice,) = await make_users("alice")
    first = await store.create_post(alice.id, PostCreate(content="one"))
    second = await store.create_post(alice.id, PostCreate(content="two"))

    await store.delete_post(second.id)
    await store.delete_post(first.id)
    third = await store.create_post(alice.id, PostCreate(content="three"))

    assert third.id == second.id + 1
    assert await store.get_post(second.id) is None
