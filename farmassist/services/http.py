"""
Farmer Assistant — Outbound HTTP client dependency.
"""

from typing import AsyncIterator

import httpx
from fastapi import Depends

from farmassist.config import Settings, get_settings


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield one AsyncClient per request, closed when the request finishes."""
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        yield client
