"""Conversations, messages and communities."""

from __future__ import annotations

import logging

from cinesocial.models import Community, Conversation, Message, Post, User
from cinesocial.models.community import COMMUNITY_ROLE_MEMBER, COMMUNITY_ROLE_OWNER
from cinesocial.schemas import CommunityCreate, MessageCreate
from cinesocial.storage.base import StoreBase, locked, newest_first, oldest_first

logger = logging.getLogger(__name__)


class MessagingStore(StoreBase):
    """Operations on direct messages and community groups."""

    @locked
    async def create_conversation(self, user_ids: list[int], name: str | None = None) -> int:
        """Open a conversation and return its id.

        Two participants make a direct conversation; any other count makes a group.
        """
        members = list(dict.fromkeys(user_ids))
        now = self._now()
        conversation = Conversation(
            id=self._next_id("conversation"),
            type="direct" if len(members) == 2 else "group",
            name=name,
            member_ids=members,
            created_at=now,
            last_message_at=now,
        )
        self._conversations[conversation.id] = conversation
        return conversation.id

    @locked
    async def get_conversation(self, conversation_id: int) -> Conversation | None:
        return self._conversations.get(conversation_id)

    @locked
    async def get_conversations(self, user_id: int) -> list[Conversation]:
        return [c for c in self._conversations.values() if user_id in c.member_ids]

    @locked
    async def get_messages(self, conversation_id: int, limit: int | None = None) -> list[Message]:
        """Return a conversation's messages oldest first, truncated to ``limit``."""
        messages = oldest_first(
            m for m in self._messages.values() if m.conversation_id == conversation_id
        )
        return messages[:limit] if limit else messages

    @locked
    async def send_message(
        self, user_id: int, conversation_id: int, payload: MessageCreate
    ) -> Message:
        now = self._now()
        message = Message(
            id=self._next_id("message"),
            conversation_id=conversation_id,
            user_id=user_id,
            content=payload.content,
            attachments=list(payload.attachments or []),
            created_at=now,
        )
        self._messages[message.id] = message
        conversation = self._conversations.get(conversation_id)
        if conversation is not None:
            self._conversations[conversation_id] = conversation.model_copy(
                update={"last_message_at": now}
            )
        return message

    @locked
    async def edit_message(self, message_id: int, content: str) -> Message:
        message = self._require(self._messages, message_id, "Message")
        updated = message.model_copy(update={"content": content, "edited_at": self._now()})
        self._messages[message_id] = updated
        return updated

    @locked
    async def delete_message(self, message_id: int) -> None:
        self._messages.pop(message_id, None)

    # Communities

    @locked
    async def create_community(self, user_id: int, payload: CommunityCreate) -> Community:
        """Create a community and enrol its creator as owner."""
        community = Community(
            id=self._next_id("community"),
            name=payload.name,
            description=payload.description,
            type=payload.type or self.settings.default_community_type,
            created_at=self._now(),
        )
        self._communities[community.id] = community
        self._community_members.set(user_id, community.id, COMMUNITY_ROLE_OWNER)
        logger.debug("User %d created community %d", user_id, community.id)
        return community

    @locked
    async def get_community(self, community_id: int) -> Community | None:
        return self._communities.get(community_id)

    @locked
    async def join_community(
        self, user_id: int, community_id: int, role: str = COMMUNITY_ROLE_MEMBER
    ) -> None:
        """Add a member, or change the role of an existing one."""
        self._community_members.set(user_id, community_id, role)

    @locked
    async def leave_community(self, user_id: int, community_id: int) -> None:
        self._community_members.discard(user_id, community_id)

    @locked
    async def get_community_role(self, user_id: int, community_id: int) -> str | None:
        return self._community_members.get(user_id, community_id)

    @locked
    async def get_community_members(self, community_id: int) -> list[User]:
        return self._users_by_ids(self._community_members.lefts_of(community_id))

    @locked
    async def get_community_posts(self, community_id: int) -> list[Post]:
        return newest_first(p for p in self._posts.values() if p.community_id == community_id)
