"""
Farmer Assistant — Configuration
──────────────────────────────────
Settings are read once from the environment (and an optional .env file)
into a typed model. `get_settings` doubles as a FastAPI dependency so tests
can swap in their own values.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Runtime settings for the API and its upstream providers."""

    weather_api_key:  str   = ""
    disease_api_key:  str   = ""
    weather_api_url:  str   = "https://api.openweathermap.org/data/2.5/forecast"
    disease_api_url:  str   = "https://plant.id/api/v3/health_assessment"
    http_timeout:     float = Field(30.0, gt=0, description="Upstream timeout in seconds")
    frontend_dir:     Path  = Path("frontend")
    host:             str   = "0.0.0.0"
    port:             int   = 4000
    log_level:        str   = "INFO"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(
                f"unknown log level {v!r}; expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level

    @property
    def weather_configured(self) -> bool:
        return bool(self.weather_api_key)

    @property
    def disease_configured(self) -> bool:
        return bool(self.disease_api_key)


# env var → Settings field
_ENV_FIELDS: dict[str, str] = {
    "WEATHER_API_KEY": "weather_api_key",
    "DISEASE_API_KEY": "disease_api_key",
    "WEATHER_API_URL": "weather_api_url",
    "DISEASE_API_URL": "disease_api_url",
    "HTTP_TIMEOUT":    "http_timeout",
    "FRONTEND_DIR":    "frontend_dir",
    "HOST":            "host",
    "PORT":            "port",
    "LOG_LEVEL":       "log_level",
}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Build settings from the environment. Cached, so the environment is read
    once per process; call `get_settings.cache_clear()` to reload.
    """
    load_dotenv(override=False)
    values = {
        field: os.environ[env]
        for env, field in _ENV_FIELDS.items()
        if os.environ.get(env) not in (None, "")
    }
    return Settings(**values)
