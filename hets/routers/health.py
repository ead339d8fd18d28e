"""
Health check endpoints.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hets import __version__
from hets.config import get_settings
from hets.database import get_db
from hets.models import RentalRequest
from hets.models.rental_request import REQUEST_STATUS_IN_PROGRESS
from hets.services.scoring_rules import (
    CATEGORY_DEFAULT,
    CATEGORY_DUMP_TRUCK,
    SeniorityScoringRules,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    timestamp: str
    database: str
    # Seniority blocks per equipment category, open block excluded
    seniority_blocks: dict[str, int]
    in_progress_requests: Optional[int] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Returns server status, the configured block counts and the number of
    rental requests currently In Progress. The count doubles as the
    database connectivity check.
    """
    settings = get_settings()
    rules = SeniorityScoringRules(settings)

    db_status = "connected"
    in_progress = None
    try:
        result = await db.execute(
            select(func.count(RentalRequest.id)).where(
                func.lower(RentalRequest.status) == REQUEST_STATUS_IN_PROGRESS.lower()
            )
        )
        in_progress = result.scalar() or 0
    except Exception as e:
        logger.warning("Health check database error: %s", e)
        db_status = f"error: {str(e)}"

    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=__version__,
        timestamp=datetime.utcnow().isoformat(),
        database=db_status,
        seniority_blocks={
            category: rules.get_total_blocks(category)
            for category in (CATEGORY_DEFAULT, CATEGORY_DUMP_TRUCK)
        },
        in_progress_requests=in_progress,
    )


@router.get("/api/health")
async def api_health_check(db: AsyncSession = Depends(get_db)):
    """
    API prefixed health check (for consistency with /api/* routes).
    """
    return await health_check(db)
