import httpx
import pytest
from pydantic import ValidationError

from sealion_mcp.app.core.config import Settings
from sealion_mcp.app.core.http_client import create_http_client, http_client_lifespan


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SEALION_API_KEY", "API_KEY", "SEALION_BASE_URL", "LOG_LEVEL", "SEALION_MOCK_PROVIDER"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.sealion_api_key == ""
    assert settings.has_api_key is False
    assert settings.sealion_base_url == "https://api.sea-lion.ai/v1"
    assert settings.rate_limit_max_requests == 10
    assert settings.rate_limit_window_ms == 60_000
    assert settings.log_level == "INFO"
    assert settings.mock_provider is False


def test_api_key_from_primary_env(monkeypatch) -> None:
    monkeypatch.setenv("SEALION_API_KEY", "primary")
    monkeypatch.setenv("API_KEY", "fallback")

    assert Settings(_env_file=None).sealion_api_key == "primary"


def test_api_key_fallback_env(monkeypatch) -> None:
    monkeypatch.setenv("API_KEY", "fallback")

    settings = Settings(_env_file=None)
    assert settings.sealion_api_key == "fallback"
    assert settings.has_api_key is True


def test_whitespace_key_is_missing(monkeypatch) -> None:
    monkeypatch.setenv("SEALION_API_KEY", "   ")
    assert Settings(_env_file=None).has_api_key is False


def test_base_url_override(monkeypatch) -> None:
    monkeypatch.setenv("SEALION_BASE_URL", "http://localhost:8080/v1")
    assert Settings(_env_file=None).sealion_base_url == "http://localhost:8080/v1"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("debug", "DEBUG"), ("warn", "WARNING"), (" Error ", "ERROR")],
)
def test_log_level_normalized(monkeypatch, raw: str, expected: str) -> None:
    monkeypatch.setenv("LOG_LEVEL", raw)
    assert Settings(_env_file=None).log_level == expected


def test_invalid_log_level_rejected(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_mock_provider_flag(monkeypatch) -> None:
    monkeypatch.setenv("SEALION_MOCK_PROVIDER", "true")
    assert Settings(_env_file=None).mock_provider is True


@pytest.mark.parametrize("field", ["rate_limit_max_requests", "rate_limit_window_ms", "default_max_tokens"])
def test_positive_ints_required(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})


def test_timeouts_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, upstream_timeout=0)


@pytest.mark.asyncio
async def test_http_client_uses_settings() -> None:
    settings = Settings(_env_file=None, httpx_connect_timeout=3.0, httpx_read_timeout=30.0)

    client = create_http_client(settings)
    try:
        assert isinstance(client, httpx.AsyncClient)
        assert client.timeout.connect == 3.0
        assert client.timeout.read == 30.0
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_http_client_single_timeout_override() -> None:
    client = create_http_client(Settings(_env_file=None), timeout=7.0)
    try:
        assert client.timeout.connect == 7.0
        assert client.timeout.pool == 7.0
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_http_client_lifespan_closes_client() -> None:
    async with http_client_lifespan(Settings(_env_file=None)) as client:
        assert not client.is_closed
    assert client.is_closed
