"""Custom exceptions for the Sea-lion MCP server.

Every failure that leaves the request pipeline is one of these. Each class
carries an ``error_type`` classification and the JSON-RPC ``code`` used when
the error is sent back to the MCP client.
"""

from typing import Any

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class SeaLionMCPError(Exception):
    """Base class for server exceptions with a JSON-RPC error code.

    All custom exceptions should inherit from this class and define
    their specific ``error_type`` and ``code`` for consistent error payloads.
    """
    error_type: str = "internal"
    code: int = INTERNAL_ERROR

    def __init__(self, message: str = "Internal error"):
        self.message = message
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        """Extra fields merged into the error payload ``data`` block."""
        return {}

    def to_error_payload(self) -> dict[str, Any]:
        """Convert to the protocol error shape (code, message, data)."""
        return {
            "code": self.code,
            "message": self.message,
            "data": {"type": self.error_type, **self.details()},
        }


class InternalError(SeaLionMCPError):
    """Raised for any unexpected failure inside the pipeline."""


class RateLimitExceededError(SeaLionMCPError):
    """Raised when the sliding-window rate limiter denies admission."""
    error_type = "throttled"

    def __init__(self, retry_after_ms: float = 0.0, detail: str | None = None):
        self.retry_after_ms = retry_after_ms
        super().__init__(
            detail or "Rate limit exceeded. Please wait before making another request."
        )

    def details(self) -> dict[str, Any]:
        return {"retry_after_ms": int(self.retry_after_ms)}


class ToolNotFoundError(SeaLionMCPError):
    """Raised when a tool name is not in the registry."""
    error_type = "not_found"
    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidParamsError(SeaLionMCPError):
    """Raised when tool arguments fail the shape check or schema validation.

    ``errors`` holds one ``"field: reason"`` entry per violation.
    """
    error_type = "invalid_params"
    code = INVALID_PARAMS

    def __init__(self, message: str, errors: list[str] | None = None, fields: list[str] | None = None):
        self.errors = errors or []
        self.fields = fields or []
        super().__init__(message)

    @classmethod
    def from_validation_error(cls, exc: Any) -> "InvalidParamsError":
        """Build from a ``pydantic.ValidationError``, listing every offending field."""
        errors: list[str] = []
        fields: list[str] = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
            errors.append(f"{field}: {err.get('msg', 'invalid value')}")
            if field not in fields:
                fields.append(field)
        return cls(f"Invalid parameters: {', '.join(errors)}", errors=errors, fields=fields)

    def details(self) -> dict[str, Any]:
        return {"fields": self.fields, "errors": self.errors}


class UpstreamError(SeaLionMCPError):
    """Generic failure talking to the Sea-lion API."""
    error_type = "upstream_error"


class UpstreamAuthError(UpstreamError):
    """Raised on HTTP 401 or when no API key is configured."""
    error_type = "upstream_auth"


class UpstreamRateLimitError(UpstreamError):
    """Raised on HTTP 429 from the Sea-lion API."""
    error_type = "upstream_throttled"


class UpstreamServerError(UpstreamError):
    """Raised on HTTP 5xx from the Sea-lion API."""
    error_type = "upstream_server_error"


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream call exceeds the configured timeout."""
    error_type = "upstream_timeout"


class UpstreamEmptyResponseError(UpstreamError):
    """Raised when the first choice carries no message content."""
    error_type = "internal"

    def __init__(self, message: str = "No content received from Sea-lion API"):
        super().__init__(message)


class ToolExecutionError(SeaLionMCPError):
    """Tool-level failure wrapping the underlying cause.

    The classification of the cause is kept so an upstream 401 still
    reaches the client as ``upstream_auth``.
    """

    def __init__(self, tool_name: str, message: str, cause: BaseException | None = None):
        self.tool_name = tool_name
        self.cause = cause
        if isinstance(cause, SeaLionMCPError):
            self.error_type = cause.error_type
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"tool": self.tool_name}
