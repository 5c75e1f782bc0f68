"""
messages.py
-----------
Purpose:
    Chat endpoints: send, thread view, read receipts and the conversation list.

Notes:
    - Send and mark-read publish a change notification on the messages key;
      clients refresh unread badges and conversation lists when they see it.
"""

from fastapi import APIRouter, Depends

from donorlink.dependencies import get_conversation_service, get_record_store
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.api.message_request import MarkReadRequest, SendMessageRequest
from donorlink.models.api.message_response import (
    ConversationResponse,
    MarkReadResponse,
    MessageResponse,
    UnreadResponse,
)
from donorlink.services.conversation_service import ConversationService
from donorlink.services.record_store import RecordStore

router = APIRouter(tags=["messages"])
logger = get_logger(__name__)


@router.post("/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    request: SendMessageRequest, record_store: RecordStore = Depends(get_record_store)
):
    message = await record_store.send_message(request.to_domain())
    return MessageResponse.from_domain(message)


@router.get("/messages/between/{user_a}/{user_b}", response_model=list[MessageResponse])
async def messages_between(
    user_a: str, user_b: str, record_store: RecordStore = Depends(get_record_store)
):
    messages = await record_store.messages_between(user_a, user_b)
    return [MessageResponse.from_domain(m) for m in messages]


@router.post("/messages/read", response_model=MarkReadResponse)
async def mark_read(request: MarkReadRequest, record_store: RecordStore = Depends(get_record_store)):
    marked = await record_store.mark_read(request.from_id, request.to_id)
    return MarkReadResponse(marked=marked)


@router.get("/messages/unread/{user_id}", response_model=UnreadResponse)
async def unread_messages(user_id: str, record_store: RecordStore = Depends(get_record_store)):
    messages = await record_store.unread_for(user_id)
    return UnreadResponse(
        count=len(messages), messages=[MessageResponse.from_domain(m) for m in messages]
    )


@router.get("/conversations/{user_id}", response_model=list[ConversationResponse])
async def list_conversations(
    user_id: str, conversations: ConversationService = Depends(get_conversation_service)
):
    summaries = await conversations.conversations_for(user_id)
    logger.debug("Conversations listed", user_id=user_id, count=len(summaries))
    return [ConversationResponse.from_domain(c) for c in summaries]


@router.get("/conversations/{user_id}/unread-count")
async def unread_count(
    user_id: str, conversations: ConversationService = Depends(get_conversation_service)
):
    """Header badge total across all conversations."""
    return {"user_id": user_id, "unread": await conversations.unread_total(user_id)}
