"""
Contact form state and submission.

The form mirrors what the contact page binds to: four text fields, an
``is_submitting`` flag and the status line shown after a submit.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.models.database_models import ContactMessage
from portfolio_api.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

SUCCESS_TEXT = "Thank you for your message! I'll get back to you soon."
FAILURE_TEXT = "Sorry, there was an error sending your message. Please try again."


@dataclasses.dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""
    is_submitting: bool = False
    submit_message: str = ""

    def fields(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
        }

    def reset(self) -> None:
        self.name = self.email = self.subject = self.message = ""

    async def submit(self, store: DocumentStore, db: AsyncSession) -> Optional[ContactMessage]:
        """
        Store the form as one unread message and clear the fields.

        Returns the stored record, or ``None`` when the store failed (the
        fields are kept so the visitor can retry) or a submit is already in
        flight.
        """
        if self.is_submitting:
            return None

        self.is_submitting = True
        self.submit_message = ""
        try:
            record = await store.add_message(db, self.fields())
        except Exception as exc:
            logger.error("Error submitting contact message: %s", exc, exc_info=True)
            await db.rollback()
            self.submit_message = FAILURE_TEXT
            return None
        finally:
            self.is_submitting = False

        self.submit_message = SUCCESS_TEXT
        self.reset()
        return record
