"""
Farmer Assistant — Health Router
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from farmassist import __version__
from farmassist.models.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return {
        "status": "ok",
        "service": "Farmer Assistant API",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
