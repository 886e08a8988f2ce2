from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Server settings loaded from environment variables.

    All settings can be configured via environment variables or .env file.
    A missing API key is not an error here: the server starts and tools
    fail individually at call time.
    """

    # Sea-lion API settings
    sealion_api_key: str = Field(
        default="", validation_alias=AliasChoices("SEALION_API_KEY", "API_KEY")
    )
    sealion_base_url: str = Field(
        default="https://api.sea-lion.ai/v1",
        validation_alias=AliasChoices("SEALION_BASE_URL"),
    )

    # Overall deadline for one upstream call (seconds)
    upstream_timeout: float = 60.0

    # HTTP client connection pool settings
    httpx_connect_timeout: float = 10.0  # Time to establish connection
    httpx_read_timeout: float = 60.0  # Time to read response data
    httpx_write_timeout: float = 10.0  # Time to send request data
    httpx_pool_timeout: float = 5.0  # Time to acquire connection from pool
    httpx_keepalive_expiry: float = 30.0
    httpx_max_connections: int = 10
    httpx_max_keepalive_connections: int = 5

    # Generation defaults applied when a request leaves them unset
    default_max_tokens: int = 512
    default_temperature: float = 0.7

    # Rate limiting settings (sliding window, whole process)
    rate_limit_max_requests: int = 10
    rate_limit_window_ms: int = 60_000

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    # Serve canned responses instead of calling the API
    mock_provider: bool = Field(
        default=False,
        validation_alias=AliasChoices("SEALION_MOCK_PROVIDER"),
    )

    # MCP server identity
    server_name: str = "sea-lionmcp"
    server_version: str = "1.0.0"

    @field_validator("rate_limit_max_requests", "rate_limit_window_ms", "default_max_tokens")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate rate limit and token values are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator(
        "upstream_timeout",
        "httpx_connect_timeout",
        "httpx_read_timeout",
        "httpx_write_timeout",
        "httpx_pool_timeout",
    )
    @classmethod
    def validate_timeout_positive(cls, v: float) -> float:
        """Validate timeout values are positive."""
        if v <= 0:
            raise ValueError("Timeout values must be positive")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        fmt = str(v).strip().lower()
        if fmt not in ("text", "structured", "json"):
            raise ValueError("log_format must be text, structured or json")
        return fmt

    @property
    def has_api_key(self) -> bool:
        return bool(self.sealion_api_key.strip())

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


# Global settings instance
settings = Settings()
