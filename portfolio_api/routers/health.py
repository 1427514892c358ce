"""
Health check endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import logging

from portfolio_api import __version__
from portfolio_api.database import get_db
from portfolio_api.models.schemas import HealthCheckResponse
from portfolio_api.services.session_manager import session_manager
from portfolio_api.utils.helpers import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint to verify system status.

    Returns:
        HealthCheckResponse with database status and live chat session count
    """
    db_status = "ok"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "error"

    return HealthCheckResponse(
        status="healthy" if db_status == "ok" else "degraded",
        database=db_status,
        chat_sessions=session_manager.count(),
        timestamp=utcnow(),
        version=__version__,
    )
