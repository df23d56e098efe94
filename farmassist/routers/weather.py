"""
Farmer Assistant — /api/weather Router
────────────────────────────────────────
GET /api/weather?q=<city>            →  upstream forecast JSON
GET /api/weather?lat=<lat>&lon=<lon>
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from farmassist.config import Settings, get_settings
from farmassist.models.schemas import ErrorResponse
from farmassist.services import get_http_client, get_weather_forecast

logger = logging.getLogger("farmassist.router")
router = APIRouter(prefix="/api/weather", tags=["Weather"])


@router.get(
    "",
    summary="5-day forecast for a city or coordinate pair",
    responses={
        400: {"model": ErrorResponse, "description": "No location given"},
        500: {"model": ErrorResponse, "description": "Weather API key not configured"},
        502: {"model": ErrorResponse, "description": "Weather provider unreachable"},
    },
)
async def weather(
    q:   Optional[str]   = Query(None, description="City name, e.g. 'Pune,IN'"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    logger.info("Weather request: q=%s, lat=%s, lon=%s", q, lat, lon)

    try:
        return await get_weather_forecast(client, settings, q=q, lat=lat, lon=lon)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
