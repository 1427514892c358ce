"""
Main FastAPI application for the portfolio backend.
Handles CORS, request logging middleware, lifespan events, and router registration.
"""
import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.database import close_db, init_db
from portfolio_api.routers import assistant, content, export, health, messages, projects, tools
from portfolio_api.utils.helpers import utcnow

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Startup / shutdown helpers
# ---------------------------------------------------------------------------

async def _check_database() -> bool:
    """Initialise DB tables and verify the connection.  Returns True on success."""
    try:
        await init_db()
        logger.info("✓ Database connection OK")
        return True
    except Exception as exc:
        logger.error("✗ Database connection failed: %s", exc)
        raise


def _prepare_content_cache() -> None:
    """Make sure the generated-content cache directory exists."""
    directory = os.path.dirname(settings.GENERATED_CONTENT_PATH)
    if directory:
        os.makedirs(directory, exist_ok=True)
    logger.info("✓ Generated content cache: %s", os.path.abspath(settings.GENERATED_CONTENT_PATH))


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting portfolio backend …")
    logger.info("=" * 60)

    # 1. Database (required; raises on failure)
    await _check_database()

    # 2. Local cache for generated content
    _prepare_content_cache()

    logger.info("=" * 60)
    logger.info("  Portfolio backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Health     : http://%s:%d/api/health", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("Shutting down portfolio backend …")
    await close_db()
    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Portfolio API",
    description=(
        "Backend for a personal portfolio site.\n\n"
        "Project listings and contact messages live in the database; the "
        "portfolio assistant answers from a fixed profile using keyword rules "
        "and templates (no model inference).\n\n"
        "Key endpoints:\n"
        "- `GET  /api/projects` — project listings (`/stream` for live updates)\n"
        "- `POST /api/messages` — contact form\n"
        "- `POST /api/assistant/sessions` — start a chat\n"
        "- `POST /api/tools/skill-analysis` — skill analyzer\n"
        "- `POST /api/content` — content generator\n"
        "- `GET  /api/export/{format}` — markdown / json / html / print export\n"
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling from the frontend
    if request.url.path not in ("/api/health/", "/"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc),
            "path": str(request.url.path),
            "timestamp": utcnow().isoformat(),
        },
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,    prefix="/api/health",    tags=["Health"])
app.include_router(projects.router,  prefix="/api/projects",  tags=["Projects"])
app.include_router(messages.router,  prefix="/api/messages",  tags=["Messages"])
app.include_router(assistant.router, prefix="/api/assistant", tags=["Assistant"])
app.include_router(tools.router,     prefix="/api/tools",     tags=["AI Tools"])
app.include_router(content.router,   prefix="/api/content",   tags=["Content"])
app.include_router(export.router,    prefix="/api/export",    tags=["Export"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """API root — returns basic service info."""
    return {
        "name": "Portfolio API",
        "version": __version__,
        "description": "Personal portfolio backend",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "projects": "/api/projects",
            "messages": "/api/messages",
            "assistant": "/api/assistant/sessions",
            "tools": "/api/tools",
            "content": "/api/content",
            "export": "/api/export",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
