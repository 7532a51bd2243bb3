# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, HTTPException

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service
from services.PortfolioHealthService import PortfolioHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="Portfolio RAG API running")


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: PortfolioHealthService = Depends(get_health_service),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called")
    try:
        result = svc.deep_health()
    except Exception as e:
        logger.exception("GET /health/deep failed: %s", e)
        raise HTTPException(status_code=500, detail="health check failed")

    logger.info("GET /health/deep completed (status=%s)", result.status)
    return result
