"""
Project listing endpoints.

Route summary
-------------
GET    /api/projects                   — list projects, newest first (?technology= filter)
POST   /api/projects                   — create project
GET    /api/projects/stream            — live project list (server-sent events)
GET    /api/projects/{project_id}      — project detail
GET    /api/projects/{project_id}/stream — live single project (server-sent events)
PATCH  /api/projects/{project_id}      — partial update
DELETE /api/projects/{project_id}      — delete project
"""
import logging
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db
from portfolio_api.dependencies.services import get_document_store
from portfolio_api.models.database_models import Project
from portfolio_api.models.schemas import ProjectCreate, ProjectResponse, ProjectUpdate
from portfolio_api.services.document_store import PROJECTS, DocumentNotFoundError, DocumentStore
from portfolio_api.utils.streaming import snapshot_stream

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_FILTER = "all"

# Explicit nulls for these are ignored on PATCH
_REQUIRED_FIELDS = {"title", "description", "technologies"}


def filter_projects(projects: Sequence[Project], active_filter: Optional[str]) -> List[Project]:
    """Keep projects using the given technology (case-insensitive); "all" keeps everything."""
    if not active_filter or active_filter.strip().lower() == ALL_FILTER:
        return list(projects)
    wanted = active_filter.strip().lower()
    return [
        project
        for project in projects
        if any(tech.lower() == wanted for tech in (project.technologies or []))
    ]


def _not_found(exc: DocumentNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Project {exc.document_id} not found.",
    )


def _render_list(projects: List[Project]) -> list:
    return [ProjectResponse.model_validate(p).model_dump(mode="json") for p in projects]


def _render_one(project: Optional[Project]):
    return ProjectResponse.model_validate(project).model_dump(mode="json") if project else None


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    technology: Optional[str] = Query(None, description='Technology filter, or "all"'),
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> List[ProjectResponse]:
    """List every project, newest first, optionally filtered by technology."""
    projects = await store.list_projects(db)
    return [ProjectResponse.model_validate(p) for p in filter_projects(projects, technology)]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> ProjectResponse:
    project = await store.add_project(db, body.model_dump())
    logger.info("Created project id=%s title=%r", project.id, project.title)
    return ProjectResponse.model_validate(project)


@router.get("/stream")
async def stream_projects(
    request: Request,
    store: DocumentStore = Depends(get_document_store),
):
    """Push the full project list now and again after every change."""
    return snapshot_stream(request, store.subscribe(PROJECTS), _render_list)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> ProjectResponse:
    try:
        project = await store.get_project(db, project_id)
    except DocumentNotFoundError as exc:
        raise _not_found(exc)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}/stream")
async def stream_project(
    project_id: str,
    request: Request,
    store: DocumentStore = Depends(get_document_store),
):
    """Push one project (``null`` while it does not exist) after every change."""
    return snapshot_stream(request, store.subscribe(PROJECTS, project_id), _render_one)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> ProjectResponse:
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field not in _REQUIRED_FIELDS
    }
    try:
        project = await store.update_project(db, project_id, changes)
    except DocumentNotFoundError as exc:
        raise _not_found(exc)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    store: DocumentStore = Depends(get_document_store),
) -> None:
    try:
        await store.delete_project(db, project_id)
    except DocumentNotFoundError as exc:
        raise _not_found(exc)
