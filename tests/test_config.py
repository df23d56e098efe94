"""
Tests for settings loading and validation.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from farmassist.config import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_defaults():
    settings = Settings()
    assert settings.frontend_dir == Path("frontend")
    assert not settings.frontend_dir.is_absolute()
    assert settings.port == 4000
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("level, expected", [("debug", "DEBUG"), (" Warning ", "WARNING")])
def test_log_level_normalised(level, expected):
    assert Settings(log_level=level).log_level == expected


def test_unknown_log_level():
    with pytest.raises(ValidationError, match="unknown log level 'verbose'"):
        Settings(log_level="verbose")


def test_reads_environment(fresh_settings, monkeypatch, tmp_path):
    monkeypatch.setenv("WEATHER_API_KEY", "owm-key")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("FRONTEND_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "error")

    settings = fresh_settings()

    assert settings.weather_configured
    assert settings.port == 8080
    assert settings.frontend_dir == tmp_path
    assert settings.log_level == "ERROR"


def test_empty_variables_fall_back_to_defaults(fresh_settings, monkeypatch):
    monkeypatch.setenv("DISEASE_API_KEY", "")
    monkeypatch.setenv("PORT", "")

    settings = fresh_settings()

    assert not settings.disease_configured
    assert settings.port == 4000
