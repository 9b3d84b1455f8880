"""Smoke tests for frontend_env_mcp.server."""

from __future__ import annotations

from frontend_env_mcp import server


def test_server_wiring():
    assert server.mcp.name == "frontend_env"
    assert server.router.settings is server.settings
    assert server.router.tool_names == [
        "get_coding_guidelines",
        "get_figma_data",
        "get_figma_image",
        "get_task_step",
    ]
