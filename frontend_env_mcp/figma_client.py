"""Figma API client wrapper for the MCP server."""

import logging
from typing import Any, Literal, Optional, TypedDict

import httpx

from .errors import FigmaAPIError, FigmaRequestError, FigmaTimeoutError

logger = logging.getLogger(__name__)

ImageFormat = Literal["png", "jpg", "svg"]


class FigmaImageResponse(TypedDict):
    """Body of GET /v1/images/:key."""

    err: Optional[str]
    images: dict[str, Optional[str]]


class FigmaClient:
    """Client for the three Figma REST endpoints used by the tools."""

    BASE_URL = "https://api.figma.com"

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-FIGMA-TOKEN": token},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _fetch(self, path: str) -> Any:
        """Make authenticated GET request to Figma API."""
        logger.debug("GET %s", path)
        try:
            response = await self._client.get(path)
        except httpx.TimeoutException as exc:
            raise FigmaTimeoutError(f"Request to {path} timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise FigmaRequestError(f"Request to {path} failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Figma API returned %s %s for %s",
                response.status_code,
                response.reason_phrase,
                path,
            )
            raise FigmaAPIError(response)

        return response.json()

    async def fetch_file(self, file_id: str) -> Any:
        """
        GET /v1/files/:key — fetch the full file document.

        Args:
            file_id: The Figma file ID

        Returns:
            The file response body, unmodified
        """
        return await self._fetch(f"/v1/files/{file_id}")

    async def fetch_nodes(self, file_id: str, node_ids: list[str]) -> Any:
        """
        GET /v1/files/:key/nodes?ids= — fetch specific nodes by ID.

        Args:
            file_id: The Figma file ID
            node_ids: Node IDs to fetch, at least one

        Returns:
            The nodes response body, unmodified
        """
        if not node_ids:
            raise ValueError("node_ids must not be empty")

        ids = ",".join(node_ids)
        return await self._fetch(f"/v1/files/{file_id}/nodes?ids={ids}")

    async def fetch_image(
        self,
        file_id: str,
        node_ids: list[str],
        format: ImageFormat = "png",
        scale: float = 1,
    ) -> FigmaImageResponse:
        """
        GET /v1/images/:key?ids= — render nodes as images.

        Args:
            file_id: The Figma file ID
            node_ids: Node IDs to render
            format: Image format (png, jpg, svg)
            scale: Image scale factor, expected within 1 to 4

        Returns:
            Images response mapping node IDs to rendered image URLs
        """
        ids = ",".join(node_ids)
        query = f"ids={ids}&format={format}&scale={scale:g}"
        return await self._fetch(f"/v1/images/{file_id}?{query}")

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()
