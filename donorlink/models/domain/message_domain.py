from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from donorlink.models.domain.person_domain import Person


class Message(BaseModel):
    """A directed chat message. Persisted with the original wire names."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    sender_id: str = Field(alias="from")
    recipient_id: str = Field(alias="to")
    body: str = Field(alias="message")
    timestamp: int
    is_read: bool = Field(default=False, alias="isRead")

    def counterpart_of(self, user_id: str) -> str:
        return self.recipient_id if self.sender_id == user_id else self.sender_id


class MessageCreate(BaseModel):
    """Send payload. `is_read` is accepted but always stored as False."""

    model_config = ConfigDict(populate_by_name=True)

    sender_id: str = Field(alias="from")
    recipient_id: str = Field(alias="to")
    body: str = Field(alias="message")
    timestamp: int | None = None
    is_read: bool = Field(default=False, alias="isRead")


@dataclass(frozen=True)
class Conversation:
    """Derived summary of one user's messages with one counterpart."""

    counterpart: Person
    last_message: Message
    unread_count: int
