"""
SQLAlchemy ORM models for the portfolio document collections.

Each table stands in for one collection of the document store: rows carry a
string document id and the record's fields, nothing relational.
"""
import uuid

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Boolean,
    JSON,
)

from portfolio_api.database import Base
from portfolio_api.utils.helpers import utcnow


def _new_document_id() -> str:
    return uuid.uuid4().hex


class Project(Base):
    """Portfolio project listing."""

    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=_new_document_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    technologies = Column(JSON, nullable=False, default=list)
    image_url = Column(String(512), nullable=True)
    github_url = Column(String(512), nullable=True)
    live_url = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class ContactMessage(Base):
    """Message submitted through the contact form."""

    __tablename__ = "messages"

    id = Column(String(32), primary_key=True, default=_new_document_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    read = Column(Boolean, nullable=False, default=False)
