"""Liveness endpoint that also pings the database."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core import schemas
from components.core.init_db import get_db
from components.core.logging_config import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "Finance Tracker"

router = APIRouter(
    prefix="/health_check",
    tags=["services"],
    responses={200: {"description": "Service is up, see status for the database"}},
)


@router.get("/", response_model=schemas.HealthCheck)
async def health_check(db: AsyncSession = Depends(get_db)) -> schemas.HealthCheck:
    """Report "healthy", or "degraded" when the database does not answer."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        database = "unavailable"
    return schemas.HealthCheck(
        service_name=SERVICE_NAME,
        status="healthy" if database == "ok" else "degraded",
        database=database,
    )
