"""
Health check endpoint with database ping.
Used by container health checks and load balancers.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.config import settings
from app.database import get_db, ping_database
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}}
)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Report service status and database connectivity.

    Returns 200 with status "UP" when the database answers a ping,
    otherwise 503 with status "DEGRADED".
    """
    database = await ping_database(db)
    healthy = database["state"] == "connected"

    body = HealthResponse(
        status="UP" if healthy else "DEGRADED",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=settings.app_name,
        database=database
    )

    if healthy:
        return body

    logger.error("Health check failed: database unavailable")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump()
    )
