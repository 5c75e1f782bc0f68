# donorlink/models/api/message_request.py
from pydantic import BaseModel, Field

from donorlink.models.domain.message_domain import MessageCreate


class SendMessageRequest(BaseModel):
    sender_id: str = Field(..., min_length=1)
    recipient_id: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1, max_length=5000)

    def to_domain(self) -> MessageCreate:
        return MessageCreate(
            sender_id=self.sender_id, recipient_id=self.recipient_id, body=self.body
        )


class MarkReadRequest(BaseModel):
    """Mark everything `from_id` sent to `to_id` as read."""

    from_id: str
    to_id: str
