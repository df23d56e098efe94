"""
Farmer Assistant — Weather Service
────────────────────────────────────
Thin proxy over the OpenWeatherMap 5-day / 3-hour forecast endpoint:
  https://api.openweathermap.org/data/2.5/forecast

The client supplies a city name or a lat/lon pair; the API key and metric
units are added here and the upstream JSON is handed back untouched.
"""

import logging
from typing import Any, Optional

import httpx

from farmassist.config import Settings
from farmassist.services.errors import (
    InvalidUpstreamResponse,
    UpstreamNotConfigured,
    UpstreamResponseError,
    UpstreamUnavailable,
)

logger = logging.getLogger("farmassist.weather")


def build_forecast_params(
    api_key: str,
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
) -> dict[str, Any]:
    """
    Query string for the forecast call. A city name wins over coordinates;
    coordinates need both halves.
    """
    if q:
        location: dict[str, Any] = {"q": q}
    elif lat is not None and lon is not None:
        location = {"lat": lat, "lon": lon}
    else:
        raise ValueError("City or coordinates are required")
    return {**location, "units": "metric", "appid": api_key}


async def get_weather_forecast(
    client: httpx.AsyncClient,
    settings: Settings,
    q: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
) -> Any:
    """
    Public entry point. Returns the decoded upstream forecast.

    Raises:
        UpstreamNotConfigured  – WEATHER_API_KEY is unset
        ValueError             – neither a city nor a full coordinate pair
        UpstreamResponseError  – provider answered non-2xx (body relayed)
        UpstreamUnavailable    – transport failure
    """
    if not settings.weather_configured:
        raise UpstreamNotConfigured("Weather")

    params = build_forecast_params(settings.weather_api_key, q=q, lat=lat, lon=lon)

    try:
        r = await client.get(settings.weather_api_url, params=params)
    except httpx.HTTPError as e:
        logger.warning("Weather provider unreachable: %s", e)
        raise UpstreamUnavailable(f"Weather provider unreachable: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        raise InvalidUpstreamResponse("Weather provider returned a non-JSON response", r.text) from e

    if r.is_error:
        logger.warning("Weather provider returned HTTP %d", r.status_code)
        raise UpstreamResponseError(r.status_code, data)

    return data
