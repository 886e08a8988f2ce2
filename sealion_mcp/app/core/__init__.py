"""Core utilities for the MCP server."""

from sealion_mcp.app.core.config import Settings, settings
from sealion_mcp.app.core.http_client import create_http_client, http_client_lifespan
from sealion_mcp.app.core.logging import get_log_context, get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "create_http_client",
    "http_client_lifespan",
    "get_logger",
    "get_log_context",
    "setup_logging",
]
