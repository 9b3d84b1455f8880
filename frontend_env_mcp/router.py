"""Dispatch tool calls by name and shape their results as MCP content."""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

import httpx
from fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError
from mcp.types import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    EmbeddedResource,
    ErrorData,
    TextContent,
    TextResourceContents,
)
from pydantic import BaseModel, Field, ValidationError

from .config import Settings
from .errors import FigmaCredentialsError, FigmaError, describe_figma_error, serialize_error
from .figma_client import FigmaClient, ImageFormat
from .guidelines import GuidelineCategory, UnknownGuidelineCategoryError, get_guidelines
from .task_steps import TaskStepCache
from .utils import extract_file_id, extract_node_ids, normalize_node_id

logger = logging.getLogger(__name__)

Content = Union[TextContent, EmbeddedResource]


class CodingGuidelinesArgs(BaseModel):
    category: GuidelineCategory


class FigmaDataArgs(BaseModel):
    figma_url: str = Field(min_length=1)


class FigmaImageArgs(BaseModel):
    file_id: str = Field(min_length=1)
    node_id: str = Field(min_length=1)
    format: ImageFormat = "png"
    scale: float = Field(default=1, ge=1, le=4)


class TaskStepArgs(BaseModel):
    cwd: str
    file_path: str = Field(min_length=1)
    step: int = Field(default=1, ge=1)


def _invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def _text(text: str) -> list[Content]:
    return [TextContent(type="text", text=text)]


class ToolRouter:
    """
    Maps tool names to their handlers.

    Arguments are validated against the tool's model before the handler
    runs, so a malformed call never reaches the network or the filesystem.
    """

    def __init__(
        self,
        settings: Settings,
        step_cache: Optional[TaskStepCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.step_cache = step_cache if step_cache is not None else TaskStepCache()
        self._transport = transport
        self._tools: dict[str, tuple[type[BaseModel], Callable[[Any], Awaitable[list[Content]]]]] = {
            "get_coding_guidelines": (CodingGuidelinesArgs, self._get_coding_guidelines),
            "get_figma_data": (FigmaDataArgs, self._get_figma_data),
            "get_figma_image": (FigmaImageArgs, self._get_figma_image),
            "get_task_step": (TaskStepArgs, self._get_task_step),
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    async def dispatch(self, name: str, arguments: Optional[dict[str, Any]] = None) -> list[Content]:
        """
        Run the tool called ``name`` with ``arguments``.

        Raises:
            McpError: METHOD_NOT_FOUND for an unknown tool, INVALID_PARAMS
                for arguments that do not fit the tool. FastMCP validates
                tool arguments against the same bounds before calling in,
                so through the server these only reach direct callers.
            ToolError: When the tool ran but failed, including a Figma URL
                without a file ID; the client gets an error result
        """
        try:
            model, handler = self._tools[name]
        except KeyError:
            raise McpError(
                ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            ) from None

        try:
            args = model.model_validate(arguments or {})
        except ValidationError as exc:
            raise _invalid_params(f"Invalid arguments for {name}: {exc}") from exc

        return await handler(args)

    def _require_token(self) -> str:
        if not self.settings.figma_token:
            raise ToolError(str(FigmaCredentialsError()))
        return self.settings.figma_token

    def _figma_client(self) -> FigmaClient:
        return FigmaClient(
            self._require_token(),
            base_url=self.settings.figma_api_base,
            timeout=self.settings.http_timeout,
            transport=self._transport,
        )

    def _upstream_error(
        self, error: FigmaError, file_id: str, node_id: Optional[str] = None
    ) -> ToolError:
        logger.warning("Figma request for %s failed: %s", file_id, error)
        return ToolError(
            f"{describe_figma_error(error, file_id=file_id, node_id=node_id)}\n\n"
            f"{serialize_error(error)}"
        )

    async def _get_coding_guidelines(self, args: CodingGuidelinesArgs) -> list[Content]:
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._transport
            ) as client:
                text = await get_guidelines(
                    args.category, client=client, base_url=self.settings.guidelines_base_url
                )
        except UnknownGuidelineCategoryError as exc:
            raise _invalid_params(str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch coding guidelines: %s", exc)
            raise ToolError(f"Failed to read the coding guidelines: {exc}") from exc

        return _text(text)

    async def _get_figma_data(self, args: FigmaDataArgs) -> list[Content]:
        logger.info("Starting Figma data retrieval")
        self._require_token()

        file_id = extract_file_id(args.figma_url)
        if not file_id:
            raise ToolError(
                f"Invalid Figma URL: {args.figma_url} - Could not extract file ID. "
                "Please check the URL format."
            )
        node_ids = [normalize_node_id(node_id) for node_id in extract_node_ids(args.figma_url)]

        async with self._figma_client() as client:
            try:
                if node_ids:
                    logger.info("Retrieving nodes %s of file %s", ", ".join(node_ids), file_id)
                    data = await client.fetch_nodes(file_id, node_ids)
                else:
                    logger.info("Retrieving file %s", file_id)
                    data = await client.fetch_file(file_id)
            except FigmaError as exc:
                raise self._upstream_error(exc, file_id, ",".join(node_ids) or None) from exc

        path, content = self._write_artifact(file_id, data)
        logger.info("Figma data cached at %s", path)
        return [
            EmbeddedResource(
                type="resource",
                resource=TextResourceContents(
                    uri=path.as_uri(),
                    mimeType="application/json",
                    text=content,
                ),
            )
        ]

    def _write_artifact(self, file_id: str, data: Any) -> tuple[Path, str]:
        directory = self.settings.figma_data_dir
        directory.mkdir(parents=True, exist_ok=True)
        path = (directory / f"{file_id}-{uuid.uuid4()}.json").resolve()
        content = json.dumps(data, indent=2)
        path.write_text(content, encoding="utf-8")
        return path, content

    async def _get_figma_image(self, args: FigmaImageArgs) -> list[Content]:
        logger.info(
            "Retrieving image for node: %s, format: %s, scale: %s",
            args.node_id,
            args.format,
            args.scale,
        )
        node_id = normalize_node_id(args.node_id)

        async with self._figma_client() as client:
            try:
                data = await client.fetch_image(
                    args.file_id, [node_id], format=args.format, scale=args.scale
                )
            except FigmaError as exc:
                raise self._upstream_error(exc, args.file_id, node_id) from exc

        image_url = next(iter(data.get("images", {}).values()), None)
        if not isinstance(image_url, str):
            details = f" ({data['err']})" if data.get("err") else ""
            raise ToolError(f"No image URL found for node: {args.node_id}{details}")

        return _text(image_url)

    async def _get_task_step(self, args: TaskStepArgs) -> list[Content]:
        path = Path(args.cwd) / args.file_path
        text = await self.step_cache.get_step(path, args.step)
        return _text(text)

