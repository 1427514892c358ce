"""
In-memory registry of assistant chat sessions.

Usage
-----
    from portfolio_api.services.session_manager import session_manager

    session = session_manager.create()
    # ... later ...
    same = session_manager.get(session.session_id)

Sessions are never persisted; a restart forgets every transcript.
"""
from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Optional

from portfolio_api.config import settings
from portfolio_api.services.assistant import ChatSession

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Session manager (class-level state, acts as a singleton)
# ---------------------------------------------------------------------------

class SessionManager:
    """Holds live ChatSession objects keyed by session id, oldest first."""

    _sessions: "OrderedDict[str, ChatSession]" = OrderedDict()

    @classmethod
    def create(cls) -> ChatSession:
        """Open a new session seeded with the welcome message."""
        session = ChatSession(session_id=uuid.uuid4().hex)
        cls._sessions[session.session_id] = session

        while len(cls._sessions) > max(settings.MAX_CHAT_SESSIONS, 1):
            evicted_id, _ = cls._sessions.popitem(last=False)
            logger.info("Evicted chat session %s (limit %d)", evicted_id, settings.MAX_CHAT_SESSIONS)

        logger.info("Chat session %s opened", session.session_id)
        return session

    @classmethod
    def get(cls, session_id: str) -> Optional[ChatSession]:
        return cls._sessions.get(session_id)

    @classmethod
    def delete(cls, session_id: str) -> bool:
        """Forget a session.  Returns False when it did not exist."""
        removed = cls._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Chat session %s closed", session_id)
        return removed is not None

    @classmethod
    def count(cls) -> int:
        return len(cls._sessions)

    @classmethod
    def clear(cls) -> None:
        cls._sessions.clear()


# Module-level singleton instance
session_manager = SessionManager
