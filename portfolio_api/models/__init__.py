"""Database and schema models for the portfolio backend."""
from portfolio_api.models.database_models import (
    Project,
    ContactMessage,
)
from portfolio_api.models.schemas import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ContactMessageCreate,
    ContactMessageResponse,
    ChatMessageResponse,
    ChatSessionResponse,
    GeneratedContentResponse,
    PortfolioResponse,
    HealthCheckResponse,
)

__all__ = [
    # Database models
    "Project",
    "ContactMessage",
    # Pydantic schemas
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ContactMessageCreate",
    "ContactMessageResponse",
    "ChatMessageResponse",
    "ChatSessionResponse",
    "GeneratedContentResponse",
    "PortfolioResponse",
    "HealthCheckResponse",
]
