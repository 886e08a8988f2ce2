from abc import ABC, abstractmethod

from sealion_mcp.app.exceptions import UpstreamError
from sealion_mcp.app.providers.models import (
    ChatCompletionRequest,
    ChatMessage,
    SeaLionModel,
    get_available_models,
    is_model_available,
)


class BaseProvider(ABC):
    """Base class for upstream text generation providers.

    Tools only depend on this interface, so the real Sea-lion client and the
    mock provider are interchangeable.
    """

    # Minimal request used to verify reachability and credentials
    CONNECTION_TEST_PROMPT = "Hello"
    CONNECTION_TEST_MAX_TOKENS = 5

    @abstractmethod
    async def generate_text(self, request: ChatCompletionRequest) -> str:
        """Send one chat completion request and return the generated text.

        Args:
            request: Normalized chat request (model, messages, sampling params)

        Returns:
            Content of the first choice's message

        Raises:
            UpstreamError: Classified failure (auth, throttling, server, timeout)
        """
        pass

    async def test_connection(self) -> None:
        """Issue a tiny generation call to check the upstream is usable.

        Raises:
            UpstreamError: Same classification as the failed call
        """
        request = ChatCompletionRequest(
            model=SeaLionModel.V3_9B_IT.value,
            messages=[ChatMessage(role="user", content=self.CONNECTION_TEST_PROMPT)],
            max_tokens=self.CONNECTION_TEST_MAX_TOKENS,
            temperature=0.1,
        )
        try:
            await self.generate_text(request)
        except UpstreamError as e:
            raise type(e)(f"Failed to connect to Sea-lion API: {e.message}") from e

    def get_available_models(self) -> list[str]:
        return get_available_models()

    def is_model_available(self, model: str) -> bool:
        return is_model_available(model)

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None
