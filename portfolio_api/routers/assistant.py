"""
Portfolio assistant chat endpoints.

Routes
------
POST   /api/assistant/sessions                        — open a session (welcome message)
GET    /api/assistant/sessions/{session_id}           — transcript
POST   /api/assistant/sessions/{session_id}/messages  — send a message, get the reply
POST   /api/assistant/sessions/{session_id}/clear     — reset to the welcome message
DELETE /api/assistant/sessions/{session_id}           — forget the session
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_api.dependencies.services import get_assistant, get_chat_session
from portfolio_api.models.schemas import (
    ChatMessageResponse,
    ChatSendRequest,
    ChatSendResponse,
    ChatSessionResponse,
)
from portfolio_api.services.assistant import AssistantService, ChatMessage, ChatSession
from portfolio_api.services.session_manager import session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


def _message_response(message: ChatMessage) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        content=message.content,
        is_user=message.is_user,
        timestamp=message.timestamp,
        type=message.type.value,
        metadata=message.metadata,
    )


def _session_response(session: ChatSession) -> ChatSessionResponse:
    return ChatSessionResponse(
        session_id=session.session_id,
        created_at=session.created_at,
        is_typing=session.is_typing,
        messages=[_message_response(m) for m in session.messages],
    )


@router.post("/sessions", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
async def open_session() -> ChatSessionResponse:
    """Start a new transcript holding only the welcome message."""
    return _session_response(session_manager.create())


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_session(session: ChatSession = Depends(get_chat_session)) -> ChatSessionResponse:
    return _session_response(session)


@router.post("/sessions/{session_id}/messages", response_model=ChatSendResponse)
async def send_message(
    body: ChatSendRequest,
    session: ChatSession = Depends(get_chat_session),
    assistant: AssistantService = Depends(get_assistant),
) -> ChatSendResponse:
    """
    Append the visitor's message and the assistant's reply.

    Only one send per session may be in flight; a second one gets 409.
    """
    if session.is_typing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The assistant is still answering the previous message.",
        )

    session.is_typing = True
    try:
        reply = await assistant.send_message(session, body.message.strip())
    finally:
        session.is_typing = False

    return ChatSendResponse(
        session_id=session.session_id,
        reply=_message_response(reply),
        messages=[_message_response(m) for m in session.messages],
    )


@router.post("/sessions/{session_id}/clear", response_model=ChatSessionResponse)
async def clear_session(session: ChatSession = Depends(get_chat_session)) -> ChatSessionResponse:
    session.reset()
    logger.info("Chat session %s cleared", session.session_id)
    return _session_response(session)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def close_session(session: ChatSession = Depends(get_chat_session)) -> None:
    session_manager.delete(session.session_id)
