"""Frontend coding guidelines fetched from the d-zero guideline repository."""

import asyncio
import logging
from types import MappingProxyType
from typing import Literal, Optional, get_args

import httpx

logger = logging.getLogger(__name__)

GuidelineCategory = Literal["html", "css", "js", "media", "web-components"]

GUIDELINE_BASE_URL = (
    "https://raw.githubusercontent.com/d-zero-dev/frontend-guidelines/refs/heads/dev/src"
)
GUIDELINE_SEPARATOR = "\n\n---\n\n"

GENERAL_DOCUMENTS = ("index.md", "naming.md")

# web-components has no dedicated document; it gets the general set only.
CATEGORY_DOCUMENTS = MappingProxyType({
    "html": ("html.md",),
    "css": ("css.md",),
    "js": ("js.md",),
    "media": ("media.md",),
    "web-components": (),
})

CATEGORIES: tuple[str, ...] = get_args(GuidelineCategory)


class UnknownGuidelineCategoryError(ValueError):
    """Raised for a category outside the supported set."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(
            f"Unknown guideline category: {category!r} "
            f"(expected one of: {', '.join(CATEGORIES)})"
        )


def guideline_urls(category: str, base_url: str = GUIDELINE_BASE_URL) -> list[str]:
    """
    List the document URLs for a category, general documents first.

    Args:
        category: One of the supported guideline categories
        base_url: Directory URL the documents live under

    Returns:
        Ordered list of Markdown document URLs
    """
    if category not in CATEGORY_DOCUMENTS:
        raise UnknownGuidelineCategoryError(category)

    base = base_url.rstrip("/")
    documents = GENERAL_DOCUMENTS + CATEGORY_DOCUMENTS[category]
    return [f"{base}/{name}" for name in documents]


async def _fetch_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def get_guidelines(
    category: str,
    client: Optional[httpx.AsyncClient] = None,
    base_url: str = GUIDELINE_BASE_URL,
) -> str:
    """
    Fetch the guideline documents for a category and join them.

    All documents are requested concurrently. Any failed request fails the
    whole call.

    Args:
        category: One of the supported guideline categories
        client: HTTP client to use; a temporary one is created when omitted
        base_url: Directory URL the documents live under

    Returns:
        The document bodies in list order, separated by a horizontal rule
    """
    urls = guideline_urls(category, base_url)
    logger.info("Fetching %d guideline documents for %s", len(urls), category)

    if client is None:
        async with httpx.AsyncClient() as own_client:
            texts = await _fetch_all(own_client, urls)
    else:
        texts = await _fetch_all(client, urls)

    return GUIDELINE_SEPARATOR.join(texts)


async def _fetch_all(client: httpx.AsyncClient, urls: list[str]) -> list[str]:
    tasks = [asyncio.ensure_future(_fetch_text(client, url)) for url in urls]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        # Outstanding fetches must settle before the client is closed.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
