"""
Farmer Assistant — /api/disease Router
────────────────────────────────────────
POST /api/disease (multipart, field "image")  →  Plant.id health assessment JSON
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from farmassist.config import Settings, get_settings
from farmassist.models.schemas import ErrorResponse
from farmassist.services import assess_plant_health, get_http_client

logger = logging.getLogger("farmassist.router")
router = APIRouter(prefix="/api/disease", tags=["Plant health"])


@router.post(
    "",
    summary="Assess plant health from a photo",
    responses={
        400: {"model": ErrorResponse, "description": "No image uploaded"},
        500: {"model": ErrorResponse, "description": "Key not configured or non-JSON upstream reply"},
        502: {"model": ErrorResponse, "description": "Plant.id unreachable"},
    },
)
async def disease(
    image: Optional[UploadFile] = File(None, description="Leaf or plant photo"),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    content = await image.read() if image is not None else b""
    logger.info(
        "Disease request: file=%s, bytes=%d",
        image.filename if image is not None else None, len(content),
    )

    try:
        return await assess_plant_health(client, settings, content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
