"""End-to-end tests for the tool call pipeline."""

from unittest.mock import patch

import pytest

from sealion_mcp.app.exceptions import (
    InternalError,
    InvalidParamsError,
    RateLimitExceededError,
    ToolExecutionError,
    ToolNotFoundError,
    UpstreamAuthError,
)
from sealion_mcp.app.middleware.rate_limit import SlidingWindowRateLimiter
from sealion_mcp.app.providers.mock import MockProvider
from sealion_mcp.app.services.pipeline import ToolPipeline, text_response
from sealion_mcp.app.tools.registry import create_default_registry


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_pipeline(provider=None, max_requests=10, clock=None):
    return ToolPipeline(
        registry=create_default_registry(),
        client=provider or MockProvider(response_text="Hi there"),
        rate_limiter=SlidingWindowRateLimiter(max_requests=max_requests, window_ms=60_000, clock=clock),
    )


class TestListTools:
    def test_lists_three_tools_in_order(self):
        tools = make_pipeline().list_tools()
        assert [tool["name"] for tool in tools] == [
            "sealion_generate_text",
            "sealion_translate",
            "sealion_cultural_analysis",
        ]

    def test_listing_does_not_consume_rate_limit(self):
        pipeline = make_pipeline(max_requests=1)
        pipeline.list_tools()
        pipeline.list_tools()
        assert pipeline.rate_limiter.remaining() == 1


class TestCallTool:
    """Successful calls."""

    @pytest.mark.asyncio
    async def test_generate_text(self):
        """Test a v3 call returns the upstream text as a single text block."""
        provider = MockProvider(response_text="Hi there")
        pipeline = make_pipeline(provider)

        response = await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello", "model": "v3"})

        assert response == {"content": [{"type": "text", "text": "Hi there"}]}
        assert provider.last_request.model == "aisingapore/Gemma-SEA-LION-v3-9B-IT"
        assert provider.last_request.extra_body is None

    @pytest.mark.asyncio
    async def test_arguments_sanitized_before_dispatch(self):
        provider = MockProvider(response_text="ok")
        pipeline = make_pipeline(provider)

        await pipeline.call_tool(
            "sealion_generate_text",
            {"prompt": "<script>alert(1)</script>hello", "system_prompt": "Say 'hi'"},
        )

        system, user = provider.last_request.messages
        assert user.content == "alert(1)hello"
        assert system.content == "Say hi"

    @pytest.mark.asyncio
    async def test_output_redacted(self):
        provider = MockProvider(response_text="Use Authorization: Bearer abc123XYZ please")
        pipeline = make_pipeline(provider)

        response = await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello"})

        text = response["content"][0]["text"]
        assert "abc123XYZ" not in text
        assert "Bearer [REDACTED]" in text

    @pytest.mark.asyncio
    async def test_same_language_translation(self):
        provider = MockProvider()
        pipeline = make_pipeline(provider)

        response = await pipeline.call_tool(
            "sealion_translate",
            {"text": "Xin chào", "source_language": "vietnamese", "target_language": "vietnamese"},
        )

        assert response["content"][0]["text"] == (
            "The text is already in vietnamese. Original text: Xin chào"
        )
        assert provider.call_count == 0

    def test_text_response_shape(self):
        assert text_response("x") == {"content": [{"type": "text", "text": "x"}]}


class TestPipelineFailures:
    """Each stage stops the call with a classified error."""

    @pytest.mark.asyncio
    async def test_throttled_after_limit(self):
        provider = MockProvider(response_text="ok")
        pipeline = make_pipeline(provider, max_requests=2, clock=FakeClock())

        await pipeline.call_tool("sealion_generate_text", {"prompt": "a"})
        await pipeline.call_tool("sealion_generate_text", {"prompt": "b"})

        with pytest.raises(RateLimitExceededError) as exc_info:
            await pipeline.call_tool("sealion_generate_text", {"prompt": "c"})

        payload = exc_info.value.to_error_payload()
        assert payload["message"] == "Rate limit exceeded. Please wait before making another request."
        assert payload["data"] == {"type": "throttled", "retry_after_ms": 60000}
        assert provider.call_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_checked_before_tool_lookup(self):
        pipeline = make_pipeline(max_requests=1, clock=FakeClock())
        await pipeline.call_tool("sealion_generate_text", {"prompt": "a"})

        with pytest.raises(RateLimitExceededError):
            await pipeline.call_tool("no_such_tool", {})

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        provider = MockProvider()
        pipeline = make_pipeline(provider)

        with pytest.raises(ToolNotFoundError) as exc_info:
            await pipeline.call_tool("sealion_summarize", {"text": "x"})

        assert exc_info.value.message == "Unknown tool: sealion_summarize"
        assert provider.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [None, "Hello", ["Hello"], 42])
    async def test_arguments_must_be_object(self, arguments):
        pipeline = make_pipeline()

        with pytest.raises(InvalidParamsError) as exc_info:
            await pipeline.call_tool("sealion_generate_text", arguments)

        assert exc_info.value.message == "Tool arguments are required and must be an object"

    @pytest.mark.asyncio
    async def test_schema_violation_names_field(self):
        provider = MockProvider()
        pipeline = make_pipeline(provider)

        with pytest.raises(InvalidParamsError) as exc_info:
            await pipeline.call_tool(
                "sealion_translate",
                {"text": "hi", "source_language": "klingon", "target_language": "english"},
            )

        assert "source_language" in exc_info.value.message
        assert exc_info.value.to_error_payload()["data"]["fields"] == ["source_language"]
        assert provider.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [("max_tokens", "100"), ("max_tokens", True), ("temperature", "0.5"), ("thinking_mode", "off")],
    )
    async def test_wrong_type_is_not_coerced(self, field, value):
        """Test that a mistyped argument is rejected rather than converted and sent upstream."""
        provider = MockProvider()
        pipeline = make_pipeline(provider)

        with pytest.raises(InvalidParamsError) as exc_info:
            await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello", field: value})

        data = exc_info.value.to_error_payload()["data"]
        assert data["type"] == "invalid_params"
        assert data["fields"] == [field]
        assert field in exc_info.value.message
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_classification(self):
        pipeline = make_pipeline(MockProvider(error=UpstreamAuthError("Invalid API key.")))

        with pytest.raises(ToolExecutionError) as exc_info:
            await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello"})

        assert exc_info.value.error_type == "upstream_auth"

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_call(self):
        """Test that a failed call leaves the pipeline ready for the next one."""
        provider = MockProvider(error=UpstreamAuthError("Invalid API key."))
        pipeline = make_pipeline(provider)

        with pytest.raises(ToolExecutionError):
            await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello"})

        provider.error = None
        provider.response_text = "Recovered"
        response = await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello"})

        assert response["content"][0]["text"] == "Recovered"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_internal_error(self):
        pipeline = make_pipeline()

        with patch.object(pipeline.registry, "get", side_effect=KeyError("broken")):
            with pytest.raises(InternalError) as exc_info:
                await pipeline.call_tool("sealion_generate_text", {"prompt": "Hello"})

        assert exc_info.value.message.startswith("Tool execution failed:")
        assert exc_info.value.error_type == "internal"
