"""
Farmer Assistant — Plant Health Service
─────────────────────────────────────────
Forwards a leaf/plant photo to the Plant.id v3 health assessment endpoint:
  https://plant.id/api/v3/health_assessment

The image is sent base64-encoded in a JSON body with the Api-Key header;
the provider's JSON answer is returned as-is.
"""

import base64
import logging
from typing import Any

import httpx

from farmassist.config import Settings
from farmassist.services.errors import (
    InvalidUpstreamResponse,
    UpstreamNotConfigured,
    UpstreamResponseError,
    UpstreamUnavailable,
)

logger = logging.getLogger("farmassist.disease")


def build_assessment_payload(image: bytes) -> dict[str, Any]:
    return {
        "images": [base64.b64encode(image).decode("ascii")],
        "classification_level": "species",
        "similar_images": True,
        "health": "only",
    }


async def assess_plant_health(
    client: httpx.AsyncClient,
    settings: Settings,
    image: bytes,
) -> Any:
    """
    Public entry point.

    Raises:
        UpstreamNotConfigured    – DISEASE_API_KEY is unset
        ValueError               – empty image
        InvalidUpstreamResponse  – provider body is not JSON
        UpstreamResponseError    – provider answered non-2xx (body relayed)
        UpstreamUnavailable      – transport failure
    """
    if not settings.disease_configured:
        raise UpstreamNotConfigured("Disease")
    if not image:
        raise ValueError("No image uploaded")

    try:
        r = await client.post(
            settings.disease_api_url,
            json=build_assessment_payload(image),
            headers={"Api-Key": settings.disease_api_key},
        )
    except httpx.HTTPError as e:
        logger.warning("Plant.id unreachable: %s", e)
        raise UpstreamUnavailable(f"Plant.id unreachable: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        logger.warning("Plant.id returned non-JSON (HTTP %d)", r.status_code)
        raise InvalidUpstreamResponse("Plant.id returned a non-JSON response", r.text) from e

    if r.is_error:
        logger.warning("Plant.id returned HTTP %d", r.status_code)
        raise UpstreamResponseError(r.status_code, data)

    return data
