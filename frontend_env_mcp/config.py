"""Environment-driven settings for the MCP server."""

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .figma_client import FigmaClient
from .guidelines import GUIDELINE_BASE_URL


def _default_cache_dir() -> Path:
    return Path(tempfile.gettempdir()) / "frontend-env-mcp" / "figma-data"


@dataclass(frozen=True)
class Settings:
    """Server configuration, usually built with :meth:`from_env`."""

    figma_token: Optional[str] = None
    figma_api_base: str = FigmaClient.BASE_URL
    guidelines_base_url: str = GUIDELINE_BASE_URL
    figma_data_dir: Path = field(default_factory=_default_cache_dir)
    http_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read settings from environment variables.

        FIGMA_ACCESS_TOKEN (or FIGMA_TOKEN) is optional here; tools that
        need it fail when it is missing.
        """
        env = os.environ if environ is None else environ

        timeout = env.get("HTTP_TIMEOUT")
        cache_dir = env.get("FIGMA_DATA_CACHE_DIR")

        return cls(
            figma_token=env.get("FIGMA_ACCESS_TOKEN") or env.get("FIGMA_TOKEN") or None,
            figma_api_base=env.get("FIGMA_API_BASE", FigmaClient.BASE_URL),
            guidelines_base_url=env.get("GUIDELINES_BASE_URL", GUIDELINE_BASE_URL),
            figma_data_dir=Path(cache_dir) if cache_dir else _default_cache_dir(),
            http_timeout=float(timeout) if timeout else None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
