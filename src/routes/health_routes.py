"""
Health Check Routes

System health and status endpoints.
"""

from fastapi import APIRouter, Request
from models.schemas import HealthResponse
from config.database import test_connection
from config.constants import CATEGORIES, PLATFORM_LABELS
from config.settings import settings


router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Returns the current status and version of the system. Audits still run
    without Redis, so a missing cache only degrades the status.

    Returns:
        HealthResponse with status, version and cache connectivity
    """
    redis_status = test_connection(getattr(request.app.state, "redis_client", None))

    return HealthResponse(
        status="healthy" if redis_status["connected"] else "degraded",
        version=settings.APP_VERSION,
        cache_connected=redis_status["connected"]
    )


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Brand visibility audit across ChatGPT, Perplexity and Google AI Overviews",
        "endpoints": {
            "health": "/health",
            "run_audit": "POST /api/audit",
            "get_audit": "GET /api/audit/{audit_id}"
        },
        "platforms": list(PLATFORM_LABELS.values()),
        "categories": [{"id": c["id"].value, "label": c["label"]} for c in CATEGORIES]
    }
