"""
Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


# Enums (matching service enums)
class ChatMessageTypeSchema(str, Enum):
    """Chat message types for API responses."""

    TEXT = "text"
    PROJECT_RECOMMENDATION = "project_recommendation"
    SKILL_ANALYSIS = "skill_analysis"
    ERROR = "error"


class ContentTypeSchema(str, Enum):
    """Content generator output types."""

    PROJECT_DESCRIPTION = "project_description"
    SKILL_ANALYSIS = "skill_analysis"
    RESUME_SECTION = "resume_section"
    COVER_LETTER = "cover_letter"


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Project Schemas
class ProjectCreate(BaseModel):
    """Schema for creating a new project."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    technologies: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Partial update; only fields present in the request body are written."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    technologies: Optional[List[str]] = None
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None


class ProjectResponse(BaseModel):
    """Schema for project responses."""

    id: str
    title: str
    description: str
    technologies: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Contact Message Schemas
class ContactMessageCreate(BaseModel):
    """Contact form submission; all four fields are required."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        return _not_blank(value)


class ContactMessageResponse(BaseModel):
    """Schema for stored contact messages."""

    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    read: bool = False

    model_config = ConfigDict(from_attributes=True)


class ContactSubmitResponse(BaseModel):
    """Result of a contact form submission."""

    submitted: bool
    message: str
    record: Optional[ContactMessageResponse] = None


# Assistant Schemas
class ChatMessageResponse(BaseModel):
    """One transcript entry."""

    id: str
    content: str
    is_user: bool
    timestamp: datetime
    type: ChatMessageTypeSchema = ChatMessageTypeSchema.TEXT
    metadata: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class ChatSessionResponse(BaseModel):
    """A chat session and its full transcript."""

    session_id: str
    created_at: datetime
    is_typing: bool = False
    messages: List[ChatMessageResponse]

    model_config = ConfigDict(from_attributes=True)


class ChatSendRequest(BaseModel):
    """Request body for POST /api/assistant/sessions/{id}/messages."""

    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("message")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        return _not_blank(value)


class ChatSendResponse(BaseModel):
    """The assistant's reply plus the transcript after the turn."""

    session_id: str
    reply: ChatMessageResponse
    messages: List[ChatMessageResponse]


# AI Tools Schemas
class SkillAnalysisRequest(BaseModel):
    skill: str = Field(..., min_length=1, max_length=100)

    @field_validator("skill")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        return _not_blank(value)


class SkillAnalysisResponse(BaseModel):
    title: str
    skill: str
    content: str
    priority: str


class ProjectIdeasRequest(BaseModel):
    interests: str = ""


class ProjectRecommendationResponse(BaseModel):
    title: str
    description: str
    technologies: List[str]
    reason: str
    match_score: int

    model_config = ConfigDict(from_attributes=True)


class ProjectIdeasResponse(BaseModel):
    keywords: List[str]
    ideas: List[ProjectRecommendationResponse]


class ResumeRequest(BaseModel):
    job_description: str = ""


class ResumeResponse(BaseModel):
    resume: str
    cover_letter: str


# Content Generator Schemas
class ContentGenerateRequest(BaseModel):
    type: ContentTypeSchema = ContentTypeSchema.PROJECT_DESCRIPTION
    input: str = Field(..., min_length=1, max_length=500)

    @field_validator("input")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        return _not_blank(value)


class GeneratedContentResponse(BaseModel):
    type: ContentTypeSchema
    title: str
    content: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


# Portfolio Schemas
class PortfolioProjectResponse(BaseModel):
    title: str
    technologies: List[str]
    description: str


class PortfolioResponse(BaseModel):
    name: str
    title: str
    skills: List[str]
    experience: str
    projects: List[PortfolioProjectResponse]
    interests: List[str]

    model_config = ConfigDict(from_attributes=True)


# Health Check Schema
class HealthCheckResponse(BaseModel):
    """Schema for health check endpoint."""

    status: str
    database: str
    chat_sessions: int = 0
    timestamp: datetime
    version: str
