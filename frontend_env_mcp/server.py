"""Frontend environment MCP server - coding guidelines, Figma data and task steps as MCP tools."""

import logging
import sys
from typing import Annotated

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

from .config import Settings
from .figma_client import ImageFormat
from .guidelines import GuidelineCategory
from .router import ToolRouter

load_dotenv()

settings = Settings.from_env()

# stdout carries the stdio JSON-RPC stream
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    stream=sys.stderr,
)

mcp = FastMCP(
    name="frontend_env",
    instructions="""
    This server provides tools for frontend implementation work.
    You can read the coding guidelines, fetch Figma design data and rendered
    node images, and walk through a task instruction document step by step.

    Figma tools need the FIGMA_ACCESS_TOKEN environment variable.
    """,
)

router = ToolRouter(settings)


@mcp.tool
async def get_coding_guidelines(
    category: Annotated[
        GuidelineCategory,
        Field(
            description=(
                "Tech type to get the coding guideline for: html, css, js, "
                "media (images, videos, audio, etc.), web-components"
            )
        ),
    ],
):
    """Get the D-Zero frontend coding guidelines for a tech type."""
    return await router.dispatch("get_coding_guidelines", {"category": category})


@mcp.tool
async def get_figma_data(
    figma_url: Annotated[
        str,
        Field(description="Figma URL (e.g.: https://www.figma.com/file/abcdef123456/FileName)"),
    ],
):
    """
    Get Figma design data from a Figma URL.

    Fetches the selected nodes when the URL has a node-id parameter,
    otherwise the whole file. The JSON is cached to a local file whose
    path is returned together with the content.
    """
    return await router.dispatch("get_figma_data", {"figma_url": figma_url})


@mcp.tool
async def get_figma_image(
    file_id: Annotated[str, Field(description="Figma file ID (e.g.: abcdef123456)")],
    node_id: Annotated[str, Field(description="Figma node ID (e.g.: 123:456)")],
    format: Annotated[ImageFormat, Field(description="Image format (default: png)")] = "png",
    scale: Annotated[
        float, Field(ge=1, le=4, description="Image scale factor (1-4, default: 1)")
    ] = 1,
):
    """Get the rendered image URL of a Figma node."""
    return await router.dispatch(
        "get_figma_image",
        {"file_id": file_id, "node_id": node_id, "format": format, "scale": scale},
    )


@mcp.tool
async def get_task_step(
    cwd: Annotated[str, Field(description="Current working directory")],
    file_path: Annotated[
        str, Field(description="Task instruction file, absolute or relative to cwd")
    ],
    step: Annotated[int, Field(ge=1, description="Step number (default: 1)")] = 1,
):
    """
    Get one step of a task instruction document.

    Steps are separated by level-1 headings. Call again with the next step
    number until all steps are completed.
    """
    return await router.dispatch(
        "get_task_step", {"cwd": cwd, "file_path": file_path, "step": step}
    )


def main():
    """Run the server over stdio."""
    mcp.run()


if __name__ == "__main__":
    main()
