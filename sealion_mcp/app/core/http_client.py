"""HTTP client construction for the upstream API.

One ``httpx.AsyncClient`` is created at startup and handed to the upstream
provider, so every tool call reuses the same connection pool.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx

from sealion_mcp.app.core.config import Settings, settings as default_settings


def create_http_client(app_settings: Optional[Settings] = None, **kwargs) -> httpx.AsyncClient:
    """Create a new HTTP client with granular timeouts and pool limits.

    The returned client should be closed when done, either directly or via
    :func:`http_client_lifespan`.

    Args:
        app_settings: Settings to read defaults from (module settings if omitted)
        **kwargs: Override default settings. Can include:
            - timeout: Single timeout value (overrides all granular timeouts)
            - connect_timeout, read_timeout, write_timeout, pool_timeout
            - max_connections, max_keepalive_connections, keepalive_expiry

    Returns:
        A new httpx.AsyncClient instance
    """
    cfg = app_settings or default_settings

    timeout_override = kwargs.get("timeout")
    if timeout_override is not None:
        timeout = httpx.Timeout(timeout_override)
    else:
        timeout = httpx.Timeout(
            connect=kwargs.get("connect_timeout", cfg.httpx_connect_timeout),
            read=kwargs.get("read_timeout", cfg.httpx_read_timeout),
            write=kwargs.get("write_timeout", cfg.httpx_write_timeout),
            pool=kwargs.get("pool_timeout", cfg.httpx_pool_timeout),
        )

    limits = httpx.Limits(
        max_connections=kwargs.get("max_connections", cfg.httpx_max_connections),
        max_keepalive_connections=kwargs.get(
            "max_keepalive_connections", cfg.httpx_max_keepalive_connections
        ),
        keepalive_expiry=kwargs.get("keepalive_expiry", cfg.httpx_keepalive_expiry),
    )

    return httpx.AsyncClient(timeout=timeout, limits=limits)


@asynccontextmanager
async def http_client_lifespan(
    app_settings: Optional[Settings] = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield a shared HTTP client and close it on exit.

        async with http_client_lifespan(settings) as http_client:
            provider = SeaLionProvider(..., http_client=http_client)
    """
    client = create_http_client(app_settings)
    try:
        yield client
    finally:
        await client.aclose()
