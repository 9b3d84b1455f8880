"""Utility functions for parsing Figma URLs."""

import re
from typing import Optional

_FILE_PATTERNS = (
    re.compile(r"figma\.com/file/([a-zA-Z0-9]+)"),
    re.compile(r"figma\.com/design/([a-zA-Z0-9]+)"),
)
_NODE_ID_PATTERN = re.compile(r"node-id=([^&]+)")


def extract_file_id(url: str) -> Optional[str]:
    """
    Extract the file ID from a Figma URL.

    Supports URL formats:
    - https://www.figma.com/file/<ID>/...
    - https://www.figma.com/design/<ID>/...

    Args:
        url: Figma file URL

    Returns:
        The file ID, or None if the URL matches neither format
    """
    for pattern in _FILE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)

    return None


def extract_node_ids(url: str) -> list[str]:
    """
    Extract node IDs from a Figma URL query string.

    Args:
        url: Figma URL potentially containing ?node-id=...

    Returns:
        The comma-separated node IDs as written in the URL, or an empty list
    """
    match = _NODE_ID_PATTERN.search(url)
    if not match:
        return []

    return match.group(1).split(",")


def normalize_node_id(node_id: str) -> str:
    """Convert a URL-style node ID (``1-2``) to the API form (``1:2``)."""
    return node_id.replace("-", ":")
