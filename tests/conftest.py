"""
Shared fixtures for portfolio backend tests.

Uses the database at TEST_DATABASE_URL (a local SQLite file via aiosqlite by
default; point it at PostgreSQL to run against the production driver).
Tables are created before each test and dropped afterwards so every test
starts with a clean slate.
"""
from __future__ import annotations

import os
import random
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Override DATABASE_URL *before* any app module is imported, so that
# settings.DATABASE_URL and the global engine point at the test DB.
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///./test_portfolio.db",
)
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["CONTENT_GENERATION_DELAY"] = "0"
os.environ["ASSISTANT_RESPONSE_DELAY"] = "0"

from portfolio_api.database import Base, get_db  # noqa: E402
from portfolio_api.dependencies.services import (  # noqa: E402
    get_assistant,
    get_content_generator,
    get_content_library,
    get_document_store,
)
from portfolio_api.main import app  # noqa: E402
from portfolio_api.models import database_models  # noqa: E402,F401
from portfolio_api.services.assistant import AssistantService  # noqa: E402
from portfolio_api.services.content_generator import (  # noqa: E402
    ContentGenerator,
    ContentLibrary,
)
from portfolio_api.services.document_store import DocumentStore  # noqa: E402
from portfolio_api.services.portfolio_data import PORTFOLIO  # noqa: E402
from portfolio_api.services.session_manager import session_manager  # noqa: E402


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory bound to a freshly created schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Provide a DB session for each test."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@pytest.fixture
def store(session_factory: async_sessionmaker) -> DocumentStore:
    return DocumentStore(session_factory=session_factory)


@pytest.fixture
def content_library(tmp_path) -> ContentLibrary:
    return ContentLibrary(str(tmp_path / "generated" / "content.json"))


@pytest.fixture(autouse=True)
def _reset_chat_sessions():
    session_manager.clear()
    yield
    session_manager.clear()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    store: DocumentStore,
    content_library: ContentLibrary,
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the DB session, the
    document store and the content cache overridden per test.
    """

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_content_library] = lambda: content_library
    app.dependency_overrides[get_content_generator] = lambda: ContentGenerator(
        signature=PORTFOLIO.name, delay=0, rng=random.Random(7)
    )
    app.dependency_overrides[get_assistant] = lambda: AssistantService(PORTFOLIO)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SAMPLE_PROJECT = {
    "title": "Weather Dashboard",
    "description": "Location-based forecasts and weather analytics.",
    "technologies": ["JavaScript", "Chart.js", "CSS3"],
    "github_url": "https://github.com/username/weather-dashboard",
}

CONTACT_FORM = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "subject": "Collaboration",
    "message": "Would you like to build something together?",
}
