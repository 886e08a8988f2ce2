"""Mock provider for local development and tests.

This provider returns canned text without making external API calls and
records every request it receives, so tests can assert on the exact
upstream payload a tool produced.

Enable for the server by setting the environment variable:
    SEALION_MOCK_PROVIDER=true
"""

import asyncio
from typing import List, Optional

from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.providers.models import ChatCompletionRequest


class MockProvider(BaseProvider):
    """Mock provider that returns a fixed or echoed response.

    Features:
    - Records each ChatCompletionRequest in ``requests``
    - Optional fixed response text; otherwise echoes the last user message
    - Optional exception raised on every call, for error-path tests
    - Optional artificial delay
    """

    def __init__(
        self,
        response_text: Optional[str] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        """Initialize the mock provider.

        Args:
            response_text: Text returned by every call (echo when None)
            error: Exception raised by every call instead of returning
            delay: Seconds to sleep before answering
        """
        self.response_text = response_text
        self.error = error
        self.delay = delay
        self.requests: List[ChatCompletionRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> Optional[ChatCompletionRequest]:
        return self.requests[-1] if self.requests else None

    def _echo(self, request: ChatCompletionRequest) -> str:
        for message in reversed(request.messages):
            if message.role == "user":
                return f"[mock:{request.model}] {message.content[:200]}"
        return f"[mock:{request.model}]"

    async def generate_text(self, request: ChatCompletionRequest) -> str:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.response_text is not None:
            return self.response_text
        return self._echo(request)
