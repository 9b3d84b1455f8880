"""Shared fixtures for the frontend_env_mcp tests."""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from frontend_env_mcp.config import Settings


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        figma_token="test-token",
        figma_data_dir=tmp_path / "figma-data",
        guidelines_base_url="https://guidelines.test/src",
    )


@pytest.fixture
def make_transport():
    return RecordingTransport
