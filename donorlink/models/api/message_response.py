# donorlink/models/api/message_response.py
from pydantic import BaseModel

from donorlink.models.api.person_response import PersonResponse
from donorlink.models.domain.message_domain import Conversation, Message


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    body: str
    timestamp: int
    is_read: bool

    @classmethod
    def from_domain(cls, message: Message) -> "MessageResponse":
        return cls(**message.model_dump())


class ConversationResponse(BaseModel):
    counterpart: PersonResponse
    last_message: MessageResponse
    unread_count: int

    @classmethod
    def from_domain(cls, conversation: Conversation) -> "ConversationResponse":
        return cls(
            counterpart=PersonResponse.public_view(conversation.counterpart),
            last_message=MessageResponse.from_domain(conversation.last_message),
            unread_count=conversation.unread_count,
        )


class MarkReadResponse(BaseModel):
    marked: int


class UnreadResponse(BaseModel):
    count: int
    messages: list[MessageResponse]
