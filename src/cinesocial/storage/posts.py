"""Posts, comments, reactions and stories.

Counter rules maintained here:

- a new like adds one to ``post.likes``; removing an existing like subtracts one
- creating a comment adds one to ``post.comments``; deleting it subtracts one
- sharing adds one to ``post.shares``; viewing a story adds one to ``story.viewers``

Decrements never take a counter below zero.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta

from cinesocial.models import Comment, Post, Story
from cinesocial.schemas import CommentCreate, PostCreate, PostUpdate, StoryCreate
from cinesocial.storage.base import (
    StoreBase,
    changes_from,
    floored,
    locked,
    merged,
    newest_first,
    oldest_first,
)

logger = logging.getLogger(__name__)

# Post fields an edit may clear by sending None; any other None means "unchanged".
_CLEARABLE_POST_FIELDS = frozenset({"location"})


class PostStore(StoreBase):
    """Operations on social content."""

    @locked
    async def create_post(self, user_id: int, payload: PostCreate) -> Post:
        post = Post(
            id=self._next_id("post"),
            user_id=user_id,
            content=payload.content,
            attachments=list(payload.attachments or []),
            visibility=payload.visibility or self.settings.default_post_visibility,
            community_id=payload.community_id,
            hashtags=list(payload.hashtags or []),
            location=payload.location,
            created_at=self._now(),
        )
        self._posts[post.id] = post
        return post

    @locked
    async def get_post(self, post_id: int) -> Post | None:
        return self._posts.get(post_id)

    @locked
    async def get_user_posts(self, user_id: int) -> list[Post]:
        return newest_first(p for p in self._posts.values() if p.user_id == user_id)

    @locked
    async def get_feed_posts(self, user_id: int) -> list[Post]:
        """Return the caller's posts and posts by accounts they follow, newest first."""
        authors = self._feed_author_ids(user_id)
        return newest_first(p for p in self._posts.values() if p.user_id in authors)

    @locked
    async def update_post(self, post_id: int, payload: PostUpdate) -> Post:
        post = self._require(self._posts, post_id, "Post")
        now = self._now()
        changes = {
            field: value
            for field, value in changes_from(payload).items()
            if value is not None or field in _CLEARABLE_POST_FIELDS
        }
        updated = merged(post, {**changes, "edited_at": now, "updated_at": now})
        self._posts[post_id] = updated
        return updated

    @locked
    async def delete_post(self, post_id: int) -> None:
        """Remove a post together with its comments, likes and reactions."""
        if self._posts.pop(post_id, None) is None:
            return
        for comment_id in [c.id for c in self._comments.values() if c.post_id == post_id]:
            del self._comments[comment_id]
            self._comment_likes.discard_right(comment_id)
        self._post_likes.discard_right(post_id)
        self._reactions.discard_right(post_id)
        logger.debug("Deleted post %d", post_id)

    @locked
    async def like_post(self, user_id: int, post_id: int) -> None:
        if post_id in self._posts and self._post_likes.add(user_id, post_id, True):
            self._bump_post(post_id, "likes", 1)

    @locked
    async def unlike_post(self, user_id: int, post_id: int) -> None:
        if self._post_likes.discard(user_id, post_id) is not None:
            self._bump_post(post_id, "likes", -1)

    @locked
    async def has_liked_post(self, user_id: int, post_id: int) -> bool:
        return (user_id, post_id) in self._post_likes

    @locked
    async def share_post(self, user_id: int, post_id: int) -> None:
        self._bump_post(post_id, "shares", 1)

    def _bump_post(self, post_id: int, counter: str, delta: int) -> None:
        post = self._posts.get(post_id)
        if post is None:
            return
        value = floored(getattr(post, counter), delta)
        self._posts[post_id] = post.model_copy(update={counter: value})
        logger.debug("Post %d %s -> %d", post_id, counter, value)

    # Comments

    @locked
    async def create_comment(self, user_id: int, post_id: int, payload: CommentCreate) -> Comment:
        """Add a comment to an existing post.

        Raises:
            NotFoundError: If the post does not exist.
        """
        self._require(self._posts, post_id, "Post")
        comment = Comment(
            id=self._next_id("comment"),
            post_id=post_id,
            user_id=user_id,
            parent_id=payload.parent_id,
            content=payload.content,
            created_at=self._now(),
        )
        self._comments[comment.id] = comment
        self._bump_post(post_id, "comments", 1)
        return comment

    @locked
    async def get_comment(self, comment_id: int) -> Comment | None:
        return self._comments.get(comment_id)

    @locked
    async def get_post_comments(self, post_id: int) -> list[Comment]:
        return newest_first(c for c in self._comments.values() if c.post_id == post_id)

    @locked
    async def get_threaded_comments(self, parent_id: int) -> list[Comment]:
        """Return direct replies to a comment in the order they were written."""
        return oldest_first(c for c in self._comments.values() if c.parent_id == parent_id)

    @locked
    async def delete_comment(self, comment_id: int) -> None:
        comment = self._comments.pop(comment_id, None)
        if comment is None:
            return
        self._comment_likes.discard_right(comment_id)
        self._bump_post(comment.post_id, "comments", -1)

    @locked
    async def like_comment(self, user_id: int, comment_id: int) -> None:
        if comment_id in self._comments and self._comment_likes.add(user_id, comment_id, True):
            self._bump_comment(comment_id, 1)

    @locked
    async def unlike_comment(self, user_id: int, comment_id: int) -> None:
        if self._comment_likes.discard(user_id, comment_id) is not None:
            self._bump_comment(comment_id, -1)

    def _bump_comment(self, comment_id: int, delta: int) -> None:
        comment = self._comments.get(comment_id)
        if comment is not None:
            self._comments[comment_id] = comment.model_copy(
                update={"likes": floored(comment.likes, delta)}
            )

    # Reactions

    @locked
    async def add_reaction(self, user_id: int, post_id: int, reaction_type: str) -> None:
        """Record a reaction.

        With ``exclusive_reactions`` enabled the new type replaces whatever the
        user had on the post; otherwise types accumulate and repeats are ignored.
        """
        current = self._reactions.get(user_id, post_id) or ()
        if self.settings.exclusive_reactions:
            types: tuple[str, ...] = (reaction_type,)
        elif reaction_type in current:
            return
        else:
            types = (*current, reaction_type)
        self._reactions.set(user_id, post_id, types)

    @locked
    async def remove_reaction(
        self, user_id: int, post_id: int, reaction_type: str | None = None
    ) -> None:
        """Remove one reaction type, or every reaction of the user when no type is given."""
        current = self._reactions.get(user_id, post_id)
        if current is None:
            return
        remaining = () if reaction_type is None else tuple(t for t in current if t != reaction_type)
        if remaining:
            self._reactions.set(user_id, post_id, remaining)
        else:
            self._reactions.discard(user_id, post_id)

    @locked
    async def get_post_reactions(self, post_id: int) -> dict[str, int]:
        """Return how many users hold each reaction type on a post."""
        tally: Counter[str] = Counter()
        for user_id in self._reactions.lefts_of(post_id):
            tally.update(self._reactions.get(user_id, post_id) or ())
        return dict(tally)

    @locked
    async def get_user_reactions(self, user_id: int, post_id: int) -> list[str]:
        return list(self._reactions.get(user_id, post_id) or ())

    # Stories

    @locked
    async def create_story(self, user_id: int, payload: StoryCreate) -> Story:
        now = self._now()
        story = Story(
            id=self._next_id("story"),
            user_id=user_id,
            media_url=payload.media_url,
            media_type=payload.media_type,
            caption=payload.caption,
            created_at=now,
            expires_at=now + timedelta(seconds=self.settings.story_ttl_seconds),
        )
        self._stories[story.id] = story
        return story

    @locked
    async def get_story(self, story_id: int) -> Story | None:
        return self._stories.get(story_id)

    @locked
    async def get_user_stories(self, user_id: int) -> list[Story]:
        return newest_first(s for s in self._stories.values() if s.user_id == user_id)

    @locked
    async def get_feed_stories(self, user_id: int) -> list[Story]:
        authors = self._feed_author_ids(user_id)
        return newest_first(s for s in self._stories.values() if s.user_id in authors)

    @locked
    async def view_story(self, user_id: int, story_id: int) -> None:
        story = self._stories.get(story_id)
        if story is not None:
            self._stories[story_id] = story.model_copy(update={"viewers": story.viewers + 1})

    @locked
    async def delete_story(self, story_id: int) -> None:
        self._stories.pop(story_id, None)

    @locked
    async def purge_expired_stories(self, now: datetime | None = None) -> int:
        """Delete stories whose ``expires_at`` has passed; return how many were removed."""
        cutoff = now or self._now()
        expired = [sid for sid, story in self._stories.items() if story.expires_at <= cutoff]
        for story_id in expired:
            del self._stories[story_id]
        if expired:
            logger.info("Purged %d expired stories", len(expired))
        return len(expired)
