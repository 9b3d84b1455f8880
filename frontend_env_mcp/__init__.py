"""MCP server for frontend work: coding guidelines, Figma data and task steps."""

__version__ = "0.1.0"
