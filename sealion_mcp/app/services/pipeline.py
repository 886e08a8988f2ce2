"""Request-handling pipeline for tool calls.

Each call runs, strictly in order and stopping at the first failure:

1. admission (rate limiter)
2. tool resolution (registry)
3. shape check (arguments must be an object)
4. schema validation
5. input sanitization
6. dispatch to the tool handler
7. output sanitization
8. response shaping

Every failure leaves :meth:`ToolPipeline.call_tool` as a
:class:`~sealion_mcp.app.exceptions.SeaLionMCPError`; one failed call never
affects the next.
"""

import time
import uuid
from typing import Any, Iterable, Mapping, Optional

from sealion_mcp.app.core.logging import get_log_context, get_logger
from sealion_mcp.app.exceptions import (
    InternalError,
    InvalidParamsError,
    RateLimitExceededError,
    SeaLionMCPError,
)
from sealion_mcp.app.middleware.rate_limit import SlidingWindowRateLimiter
from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.services.sanitizer import (
    INPUT_RULES,
    OUTPUT_RULES,
    SanitizationRule,
    sanitize_input,
    sanitize_output,
)
from sealion_mcp.app.tools.registry import ToolRegistry

logger = get_logger(__name__)


def text_response(text: str) -> dict[str, Any]:
    """Wrap text in the protocol's success payload."""
    return {"content": [{"type": "text", "text": text}]}


class ToolPipeline:
    """Owns the rate limiter, tool registry and upstream client for one server."""

    def __init__(
        self,
        registry: ToolRegistry,
        client: BaseProvider,
        rate_limiter: SlidingWindowRateLimiter,
        input_rules: Iterable[SanitizationRule] = INPUT_RULES,
        output_rules: Iterable[SanitizationRule] = OUTPUT_RULES,
    ):
        self.registry = registry
        self.client = client
        self.rate_limiter = rate_limiter
        self.input_rules = tuple(input_rules)
        self.output_rules = tuple(output_rules)

    def list_tools(self) -> list[dict[str, Any]]:
        tools = self.registry.list_tools()
        logger.debug(f"Listing tools: {[tool['name'] for tool in tools]}")
        return tools

    async def call_tool(self, name: str, arguments: Optional[Any]) -> dict[str, Any]:
        """Run one tool call through the full pipeline.

        Returns:
            ``{"content": [{"type": "text", "text": ...}]}``

        Raises:
            SeaLionMCPError: Classified failure (throttled, not found,
                invalid params, upstream or internal)
        """
        request_id = uuid.uuid4().hex[:12]
        log_context = get_log_context(request_id=request_id, tool=name)
        started = time.perf_counter()
        logger.info(f"Executing tool: {name}", extra=log_context)

        try:
            text = await self._process(name, arguments)
        except SeaLionMCPError as e:
            logger.error(
                f"Error executing tool {name}: {e.message}",
                extra={**log_context, "error_type": e.error_type, "duration_ms": _elapsed_ms(started)},
            )
            raise
        except Exception as e:
            logger.exception(
                f"Unexpected error executing tool {name}",
                extra={**log_context, "error_type": "internal", "duration_ms": _elapsed_ms(started)},
            )
            raise InternalError(f"Tool execution failed: {e}") from e

        logger.info(
            f"Tool {name} executed successfully",
            extra={**log_context, "duration_ms": _elapsed_ms(started)},
        )
        return text_response(text)

    async def _process(self, name: str, arguments: Optional[Any]) -> str:
        admission = self.rate_limiter.check()
        if not admission.allowed:
            raise RateLimitExceededError(retry_after_ms=admission.retry_after_ms or 0.0)

        tool = self.registry.get(name)

        if arguments is None or not isinstance(arguments, Mapping):
            raise InvalidParamsError("Tool arguments are required and must be an object")

        validated = tool.validate(arguments)
        sanitized = sanitize_input(validated.model_dump(), self.input_rules)

        result = await tool.run(tool.bind(sanitized), self.client)

        return sanitize_output(result, self.output_rules)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
