"""Tests for server construction and process startup."""

from unittest.mock import AsyncMock, patch

import pytest

from sealion_mcp.app.core.config import Settings
from sealion_mcp.app.main import create_provider, create_server, run, serve
from sealion_mcp.app.providers.mock import MockProvider
from sealion_mcp.app.providers.sealion import SeaLionProvider
from sealion_mcp.app.server import SeaLionMCPServer


@pytest.fixture
def app_settings(monkeypatch):
    for name in ("SEALION_API_KEY", "API_KEY", "SEALION_MOCK_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, rate_limit_max_requests=3)


class TestCreateProvider:
    def test_real_provider_by_default(self, app_settings):
        provider = create_provider(app_settings.model_copy(update={"sealion_api_key": "k"}))

        assert isinstance(provider, SeaLionProvider)
        assert provider.api_key == "k"
        assert provider.base_url == "https://api.sea-lion.ai/v1"

    def test_mock_provider_flag(self, app_settings):
        provider = create_provider(app_settings.model_copy(update={"mock_provider": True}))
        assert isinstance(provider, MockProvider)


class TestCreateServer:
    def test_wires_pipeline_from_settings(self, app_settings):
        provider = MockProvider()
        server = create_server(app_settings, provider=provider)

        assert isinstance(server, SeaLionMCPServer)
        assert server.pipeline.client is provider
        assert server.pipeline.rate_limiter.max_requests == 3
        assert len(server.pipeline.registry) == 3

    @pytest.mark.asyncio
    async def test_mock_server_end_to_end(self, app_settings):
        server = create_server(app_settings.model_copy(update={"mock_provider": True}))

        response = await server.pipeline.call_tool(
            "sealion_generate_text", {"prompt": "Hello", "model": "v3"}
        )

        assert response["content"][0]["text"] == "[mock:aisingapore/Gemma-SEA-LION-v3-9B-IT] Hello"


class TestServe:
    @pytest.mark.asyncio
    async def test_serve_checks_upstream_then_runs_stdio(self, app_settings):
        cfg = app_settings.model_copy(update={"mock_provider": True})

        with patch.object(SeaLionMCPServer, "test_upstream", new=AsyncMock(return_value=False)) as check, \
                patch.object(SeaLionMCPServer, "run_stdio", new=AsyncMock()) as run_stdio:
            await serve(cfg)

        check.assert_awaited_once()
        run_stdio.assert_awaited_once()

    def test_run_exits_non_zero_on_startup_failure(self):
        with patch("sealion_mcp.app.main.setup_logging"), \
                patch("sealion_mcp.app.main.serve", new=AsyncMock(side_effect=RuntimeError("boom"))):
            with pytest.raises(SystemExit) as exc_info:
                run()

        assert exc_info.value.code == 1
