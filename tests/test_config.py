"""Tests for frontend_env_mcp.config."""

from __future__ import annotations

import tempfile
from pathlib import Path

from frontend_env_mcp.config import Settings
from frontend_env_mcp.figma_client import FigmaClient
from frontend_env_mcp.guidelines import GUIDELINE_BASE_URL


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.figma_token is None
    assert settings.figma_api_base == FigmaClient.BASE_URL
    assert settings.guidelines_base_url == GUIDELINE_BASE_URL
    assert settings.figma_data_dir == Path(tempfile.gettempdir()) / "frontend-env-mcp" / "figma-data"
    assert settings.http_timeout is None
    assert settings.log_level == "INFO"


def test_reads_environment():
    settings = Settings.from_env({
        "FIGMA_ACCESS_TOKEN": "figd_token",
        "FIGMA_API_BASE": "https://figma.internal",
        "GUIDELINES_BASE_URL": "https://docs.internal/src",
        "FIGMA_DATA_CACHE_DIR": "/var/cache/figma",
        "HTTP_TIMEOUT": "12.5",
        "LOG_LEVEL": "debug",
    })

    assert settings.figma_token == "figd_token"
    assert settings.figma_api_base == "https://figma.internal"
    assert settings.guidelines_base_url == "https://docs.internal/src"
    assert settings.figma_data_dir == Path("/var/cache/figma")
    assert settings.http_timeout == 12.5
    assert settings.log_level == "DEBUG"


def test_figma_token_fallback():
    assert Settings.from_env({"FIGMA_TOKEN": "legacy"}).figma_token == "legacy"
    assert Settings.from_env({"FIGMA_ACCESS_TOKEN": "", "FIGMA_TOKEN": ""}).figma_token is None
