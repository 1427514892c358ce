"""
Service dependencies for FastAPI routes.

Routers never build services themselves; they ask for them here so tests can
swap any of them through ``app.dependency_overrides``.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import HTTPException, status

from portfolio_api.config import settings
from portfolio_api.services.assistant import AssistantService, ChatSession
from portfolio_api.services.content_generator import ContentGenerator, ContentLibrary
from portfolio_api.services.document_store import DocumentStore, document_store
from portfolio_api.services.portfolio_data import PORTFOLIO
from portfolio_api.services.session_manager import session_manager

logger = logging.getLogger(__name__)


def get_document_store() -> DocumentStore:
    return document_store


@lru_cache(maxsize=1)
def get_assistant() -> AssistantService:
    return AssistantService(PORTFOLIO, response_delay=settings.ASSISTANT_RESPONSE_DELAY)


@lru_cache(maxsize=1)
def get_content_generator() -> ContentGenerator:
    return ContentGenerator(signature=PORTFOLIO.name, delay=settings.CONTENT_GENERATION_DELAY)


@lru_cache(maxsize=1)
def get_content_library() -> ContentLibrary:
    return ContentLibrary(settings.GENERATED_CONTENT_PATH)


async def get_chat_session(session_id: str) -> ChatSession:
    """Resolve the ``{session_id}`` path parameter. Raises 404 if unknown."""
    session = session_manager.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chat session {session_id} not found.",
        )
    return session
