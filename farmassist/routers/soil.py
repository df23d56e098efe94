"""
Farmer Assistant — /api/soil Router
─────────────────────────────────────
POST /api/soil  →  Per-nutrient status and advice for one soil test.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from farmassist.models.schemas import ErrorResponse, SoilReport, SoilSample
from farmassist.services import analyze_soil

logger = logging.getLogger("farmassist.router")
router = APIRouter(prefix="/api/soil", tags=["Soil"])


@router.post(
    "",
    response_model=SoilReport,
    summary="Evaluate soil nutrient readings against reference ranges",
    responses={
        422: {"model": ErrorResponse, "description": "Malformed soil sample"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def soil(
    payload: Dict[str, Any] = Body(
        ...,
        openapi_examples={
            "balanced": {
                "summary": "All nutrients in range",
                "value": SoilSample(
                    crop="tomato", soil_type="loamy", nitrogen=100, phosphorus=30,
                    potassium=125, sulfur=15, organic_matter=2.0, ph=6.8,
                ).model_dump(),
            },
        },
    ),
) -> SoilReport:
    """
    Accepts crop, soil_type and six nutrient readings (numbers or numeric
    strings) and returns a LOW / OPTIMAL / HIGH verdict with a suggestion
    for each of nitrogen, phosphorus, potassium, sulfur, organic_matter, ph.
    """
    logger.info("Soil request: crop=%s, soil_type=%s", payload.get("crop"), payload.get("soil_type"))

    try:
        return analyze_soil(payload)
    except ValueError as e:
        logger.warning("Malformed soil sample: %s", e)
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )
