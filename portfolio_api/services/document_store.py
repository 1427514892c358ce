"""
Document-store adapter for the ``projects`` and ``messages`` collections.

Public API
----------
DocumentStore.list_projects(db)                    -> List[Project]
DocumentStore.get_project(db, project_id)          -> Project
DocumentStore.add_project(db, data)                -> Project
DocumentStore.update_project(db, project_id, data) -> Project
DocumentStore.delete_project(db, project_id)       -> None
DocumentStore.add_message(db, data)                -> ContactMessage
DocumentStore.list_messages(db)                    -> List[ContactMessage]
DocumentStore.mark_message_read(db, message_id)    -> ContactMessage
DocumentStore.delete_message(db, message_id)       -> None
DocumentStore.subscribe(collection, document_id=None) -> async iterator of snapshots

Every call goes straight to the database.  Errors raised by SQLAlchemy are not
caught or translated; the only error of our own is DocumentNotFoundError.
Writes commit immediately so live subscribers re-reading the collection see
them.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Set, Type, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_api.database import AsyncSessionLocal
from portfolio_api.models.database_models import ContactMessage, Project
from portfolio_api.utils.helpers import utcnow

logger = logging.getLogger(__name__)

PROJECTS = "projects"
MESSAGES = "messages"

Record = Union[Project, ContactMessage]
Snapshot = Union[List[Record], Optional[Record]]

_MODELS: Dict[str, Type[Record]] = {
    PROJECTS: Project,
    MESSAGES: ContactMessage,
}


class DocumentNotFoundError(LookupError):
    """Raised when an update/delete/read targets a document that does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"No document '{document_id}' in collection '{collection}'")
        self.collection = collection
        self.document_id = document_id


# ---------------------------------------------------------------------------
# Change feed
# ---------------------------------------------------------------------------

class ChangeFeed:
    """
    Fan-out of "collection changed" signals to live subscribers.

    Each subscriber owns a one-slot queue; bursts of writes collapse into a
    single pending signal, and the subscriber re-reads the collection anyway.
    """

    def __init__(self) -> None:
        self._queues: Dict[str, Set[asyncio.Queue]] = {}

    def register(self, collection: str) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._queues.setdefault(collection, set()).add(queue)
        return queue

    def unregister(self, collection: str, queue: asyncio.Queue) -> None:
        queues = self._queues.get(collection)
        if queues is not None:
            queues.discard(queue)
            if not queues:
                del self._queues[collection]

    def publish(self, collection: str) -> None:
        for queue in list(self._queues.get(collection, ())):
            if queue.empty():
                queue.put_nowait(collection)

    def subscriber_count(self, collection: str) -> int:
        return len(self._queues.get(collection, ()))


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class DocumentStore:
    """Thin CRUD + live-query wrapper over the two collections."""

    def __init__(
        self,
        session_factory: async_sessionmaker = AsyncSessionLocal,
        feed: Optional[ChangeFeed] = None,
    ) -> None:
        self._session_factory = session_factory
        self.feed = feed or ChangeFeed()

    # -- generic helpers ----------------------------------------------------

    @staticmethod
    def _model(collection: str) -> Type[Record]:
        try:
            return _MODELS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'") from None

    async def _list(self, db: AsyncSession, collection: str) -> List[Record]:
        model = self._model(collection)
        result = await db.execute(select(model).order_by(model.created_at.desc()))
        return list(result.scalars().all())

    async def _find(self, db: AsyncSession, collection: str, document_id: str) -> Optional[Record]:
        model = self._model(collection)
        result = await db.execute(select(model).where(model.id == document_id))
        return result.scalar_one_or_none()

    async def _get(self, db: AsyncSession, collection: str, document_id: str) -> Record:
        document = await self._find(db, collection, document_id)
        if document is None:
            raise DocumentNotFoundError(collection, document_id)
        return document

    async def _add(self, db: AsyncSession, collection: str, data: Dict[str, Any]) -> Record:
        document = self._model(collection)(**data)
        db.add(document)
        await db.commit()
        logger.info("Added %s/%s", collection, document.id)
        self.feed.publish(collection)
        return document

    async def _update(
        self, db: AsyncSession, collection: str, document_id: str, data: Dict[str, Any]
    ) -> Record:
        document = await self._get(db, collection, document_id)
        for field, value in data.items():
            setattr(document, field, value)
        await db.commit()
        logger.info("Updated %s/%s fields=%s", collection, document_id, sorted(data))
        self.feed.publish(collection)
        return document

    async def _delete(self, db: AsyncSession, collection: str, document_id: str) -> None:
        document = await self._get(db, collection, document_id)
        await db.delete(document)
        await db.commit()
        logger.info("Deleted %s/%s", collection, document_id)
        self.feed.publish(collection)

    # -- projects -----------------------------------------------------------

    async def list_projects(self, db: AsyncSession) -> List[Project]:
        return await self._list(db, PROJECTS)

    async def get_project(self, db: AsyncSession, project_id: str) -> Project:
        return await self._get(db, PROJECTS, project_id)

    async def add_project(self, db: AsyncSession, data: Dict[str, Any]) -> Project:
        """Insert a project; ``created_at`` and ``updated_at`` are both set to now."""
        now = utcnow()
        return await self._add(db, PROJECTS, {**data, "created_at": now, "updated_at": now})

    async def update_project(
        self, db: AsyncSession, project_id: str, data: Dict[str, Any]
    ) -> Project:
        """Apply a partial update and bump ``updated_at``."""
        return await self._update(db, PROJECTS, project_id, {**data, "updated_at": utcnow()})

    async def delete_project(self, db: AsyncSession, project_id: str) -> None:
        await self._delete(db, PROJECTS, project_id)

    # -- contact messages ---------------------------------------------------

    async def add_message(self, db: AsyncSession, data: Dict[str, Any]) -> ContactMessage:
        """Store a contact message; it always starts unread."""
        return await self._add(db, MESSAGES, {**data, "created_at": utcnow(), "read": False})

    async def list_messages(self, db: AsyncSession) -> List[ContactMessage]:
        return await self._list(db, MESSAGES)

    async def mark_message_read(self, db: AsyncSession, message_id: str) -> ContactMessage:
        return await self._update(db, MESSAGES, message_id, {"read": True})

    async def delete_message(self, db: AsyncSession, message_id: str) -> None:
        await self._delete(db, MESSAGES, message_id)

    # -- live queries -------------------------------------------------------

    async def _snapshot(self, collection: str, document_id: Optional[str]) -> Snapshot:
        async with self._session_factory() as session:
            if document_id is None:
                return await self._list(session, collection)
            return await self._find(session, collection, document_id)

    async def subscribe(
        self, collection: str, document_id: Optional[str] = None
    ) -> AsyncIterator[Snapshot]:
        """
        Yield the current snapshot, then a fresh one after every change.

        With *document_id* each snapshot is that single document (``None``
        while it does not exist); otherwise the whole collection, newest first.
        The subscription is released when the consumer closes the iterator.
        """
        self._model(collection)
        queue = self.feed.register(collection)
        logger.info(
            "Subscribed to %s (%d live)", collection, self.feed.subscriber_count(collection)
        )
        try:
            while True:
                yield await self._snapshot(collection, document_id)
                await queue.get()
        finally:
            self.feed.unregister(collection, queue)
            logger.info("Unsubscribed from %s", collection)


# Module-level instance shared by the routers
document_store = DocumentStore()
