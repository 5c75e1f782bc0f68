"""
Conversation aggregation.

Conversations are never stored: every call regroups the flat message
collection by counterpart. Messages with equal timestamps keep their
stored order, so ties are resolved by insertion order only.
"""

from __future__ import annotations

from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.domain.message_domain import Conversation, Message
from donorlink.services.record_store import RecordStore

logger = get_logger(__name__)


class ConversationService:
    def __init__(self, record_store: RecordStore):
        self.record_store = record_store

    async def conversations_for(self, user_id: str) -> list[Conversation]:
        """
        Build one summary per counterpart the user has exchanged messages with.

        Counterparts whose account no longer exists are skipped. The result
        is ordered by last-message time, newest first.
        """
        groups: dict[str, list[Message]] = {}
        for message in await self.record_store.list_messages():
            if message.sender_id != user_id and message.recipient_id != user_id:
                continue
            groups.setdefault(message.counterpart_of(user_id), []).append(message)

        conversations = []
        for counterpart_id, messages in groups.items():
            counterpart = await self.record_store.get_person_by_id(counterpart_id)
            if counterpart is None:
                logger.debug(
                    "Skipping conversation with missing person",
                    user_id=user_id,
                    counterpart_id=counterpart_id,
                )
                continue

            newest_first = sorted(messages, key=lambda m: m.timestamp, reverse=True)
            unread = sum(1 for m in messages if m.recipient_id == user_id and not m.is_read)
            conversations.append(
                Conversation(
                    counterpart=counterpart,
                    last_message=newest_first[0],
                    unread_count=unread,
                )
            )

        conversations.sort(key=lambda c: c.last_message.timestamp, reverse=True)
        return conversations

    async def unread_total(self, user_id: str) -> int:
        return len(await self.record_store.unread_for(user_id))
