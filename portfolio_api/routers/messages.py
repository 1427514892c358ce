"""
Contact message endpoints.

Route summary
-------------
POST   /api/messages                      — submit the contact form
GET    /api/messages                      — list messages, newest first
GET    /api/messages/stream               — live message list (server-sent events)
POST   /api/messages/{message_id}/read    — mark a message as read
DELETE /api/messages/{message_id}         — delete a message
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db
from portfolio_api.dependencies.services import get_document_store
from portfolio_api.models.database_models import ContactMessage
from portfolio_api.models.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactSubmitResponse,
)
from portfolio_api.services.contact import ContactForm
from portfolio_api.services.document_store import MESSAGES, DocumentNotFoundError, DocumentStore
from portfolio_api.utils.streaming import snapshot_stream

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(exc: DocumentNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Message {exc.document_id} not found.",
    )


def _render_list(messages: List[ContactMessage]) -> list:
    return [ContactMessageResponse.model_validate(m).model_dump(mode="json") for m in messages]


@router.post("", response_model=ContactSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_message(
    body: ContactMessageCreate,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
):
    """
    Store a contact form submission as one unread message.

    A storage failure is reported with the fixed failure text and a 503, not
    as an internal error.
    """
    form = ContactForm(**body.model_dump())
    record = await form.submit(store, db)

    if record is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ContactSubmitResponse(submitted=False, message=form.submit_message).model_dump(
                mode="json"
            ),
        )

    return ContactSubmitResponse(
        submitted=True,
        message=form.submit_message,
        record=ContactMessageResponse.model_validate(record),
    )


@router.get("", response_model=List[ContactMessageResponse])
async def list_messages(
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> List[ContactMessageResponse]:
    messages = await store.list_messages(db)
    return [ContactMessageResponse.model_validate(m) for m in messages]


@router.get("/stream")
async def stream_messages(
    request: Request,
    store: DocumentStore = Depends(get_document_store),
):
    """Push the full message list now and again after every change."""
    return snapshot_stream(request, store.subscribe(MESSAGES), _render_list)


@router.post("/{message_id}/read", response_model=ContactMessageResponse)
async def mark_read(
    message_id: str,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> ContactMessageResponse:
    try:
        message = await store.mark_message_read(db, message_id)
    except DocumentNotFoundError as exc:
        raise _not_found(exc)
    return ContactMessageResponse.model_validate(message)


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_message(
    message_id: str,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> None:
    try:
        await store.delete_message(db, message_id)
    except DocumentNotFoundError as exc:
        raise _not_found(exc)
