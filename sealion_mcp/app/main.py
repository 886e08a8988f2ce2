"""Process entry point for the Sea-lion MCP server.

Run with ``sealion-mcp`` (console script) or ``python -m sealion_mcp.app.main``.
"""

import asyncio
import signal
import sys
from typing import Optional

import httpx

from sealion_mcp.app.core.config import Settings, settings as default_settings
from sealion_mcp.app.core.http_client import http_client_lifespan
from sealion_mcp.app.core.logging import get_logger, setup_logging
from sealion_mcp.app.middleware.rate_limit import SlidingWindowRateLimiter
from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.providers.mock import MockProvider
from sealion_mcp.app.providers.sealion import SeaLionProvider
from sealion_mcp.app.server import SeaLionMCPServer
from sealion_mcp.app.services.pipeline import ToolPipeline
from sealion_mcp.app.tools.registry import create_default_registry

logger = get_logger(__name__)


def create_provider(
    app_settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> BaseProvider:
    """Build the upstream provider selected by settings."""
    if app_settings.mock_provider:
        logger.warning("SEALION_MOCK_PROVIDER is set - tools return mock responses")
        return MockProvider()
    return SeaLionProvider(
        api_key=app_settings.sealion_api_key,
        base_url=app_settings.sealion_base_url,
        http_client=http_client,
        timeout=app_settings.upstream_timeout,
        default_max_tokens=app_settings.default_max_tokens,
        default_temperature=app_settings.default_temperature,
    )


def create_server(
    app_settings: Optional[Settings] = None,
    provider: Optional[BaseProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SeaLionMCPServer:
    """Create and wire the MCP server.

    Args:
        app_settings: Settings to use (module settings if omitted)
        provider: Upstream provider override, mainly for tests
        http_client: Shared HTTP client for the Sea-lion provider

    Returns:
        Configured server instance
    """
    cfg = app_settings or default_settings
    pipeline = ToolPipeline(
        registry=create_default_registry(),
        client=provider or create_provider(cfg, http_client),
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=cfg.rate_limit_max_requests,
            window_ms=cfg.rate_limit_window_ms,
        ),
    )
    return SeaLionMCPServer(pipeline, name=cfg.server_name, version=cfg.server_version)


async def serve(app_settings: Optional[Settings] = None) -> None:
    """Start the server and serve stdio until the client disconnects."""
    cfg = app_settings or default_settings

    if not cfg.has_api_key and not cfg.mock_provider:
        logger.warning(
            "No Sea-lion API key configured (SEALION_API_KEY / API_KEY); "
            "tool calls will fail until one is provided"
        )

    async with http_client_lifespan(cfg) as http_client:
        server = create_server(cfg, http_client=http_client)
        try:
            await server.test_upstream()
            await server.run_stdio()
        finally:
            await server.pipeline.client.aclose()


def _exit_on_signal(signum: int, _frame) -> None:
    logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    setup_logging()
    signal.signal(signal.SIGTERM, _exit_on_signal)

    logger.info("Starting Sea-lionMCP Server...")
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Received SIGINT, shutting down...")
    except Exception:
        logger.exception("Failed to start Sea-lionMCP Server")
        sys.exit(1)


if __name__ == "__main__":
    run()
