"""Sea-lion API provider implementation.

The Sea-lion API is OpenAI-compatible, so requests go through the ``openai``
SDK pointed at the Sea-lion base URL. Failures are classified into the
exceptions in :mod:`sealion_mcp.app.exceptions`; nothing is retried here.
"""

import asyncio
from typing import Any, Dict, Optional

import httpx
from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    InternalServerError,
    RateLimitError,
)

from sealion_mcp.app.core.logging import get_logger
from sealion_mcp.app.exceptions import (
    UpstreamAuthError,
    UpstreamEmptyResponseError,
    UpstreamError,
    UpstreamRateLimitError,
    UpstreamServerError,
    UpstreamTimeoutError,
)
from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.providers.models import ChatCompletionRequest

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.sea-lion.ai/v1"


class SeaLionProvider(BaseProvider):
    """Sea-lion chat completion client with shared HTTP connection pooling.

    If http_client is provided, it is used for all requests and owned by the
    caller. If not, the SDK creates its own client and :meth:`aclose` closes it.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
        default_max_tokens: int = 512,
        default_temperature: float = 0.7,
    ):
        """Initialize the Sea-lion provider.

        Args:
            api_key: Sea-lion API key (empty means every call fails with an auth error)
            base_url: API base URL
            http_client: Optional shared HTTP client
            timeout: Overall deadline for one call, in seconds
            default_max_tokens: Used when a request leaves max_tokens unset
            default_temperature: Used when a request leaves temperature unset
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_max_tokens = default_max_tokens
        self.default_temperature = default_temperature
        self._owns_client = http_client is None
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            http_client=http_client,
            timeout=timeout,
            max_retries=0,
        )
        if not api_key:
            logger.warning(
                "Sea-lion API key not found in environment variables. "
                "Please set SEALION_API_KEY or API_KEY."
            )
        logger.info(f"Sea-lion client initialized: base_url={self.base_url}")

    def _build_params(self, request: ChatCompletionRequest) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "model": request.model,
            "messages": [message.model_dump() for message in request.messages],
            "max_tokens": (
                request.max_tokens if request.max_tokens is not None else self.default_max_tokens
            ),
            "temperature": (
                request.temperature if request.temperature is not None else self.default_temperature
            ),
        }
        if request.extra_body:
            params["extra_body"] = request.extra_body
        return params

    async def generate_text(self, request: ChatCompletionRequest) -> str:
        """Send a non-streaming chat completion request.

        Raises:
            UpstreamAuthError: Missing key or HTTP 401
            UpstreamRateLimitError: HTTP 429
            UpstreamServerError: HTTP 5xx
            UpstreamTimeoutError: Call exceeded ``timeout``
            UpstreamEmptyResponseError: First choice has no content
            UpstreamError: Any other API failure
        """
        if not self.api_key:
            raise UpstreamAuthError("API key is required for Sea-lion connection")

        logger.debug(
            f"Making text generation request: model={request.model}, "
            f"messages={len(request.messages)}"
        )

        try:
            completion = await asyncio.wait_for(
                self._client.chat.completions.create(**self._build_params(request)),
                timeout=self.timeout,
            )
        except AuthenticationError as e:
            logger.error(f"Sea-lion authentication failed: {e}")
            raise UpstreamAuthError(
                "Invalid API key. Please check your Sea-lion API credentials."
            ) from e
        except RateLimitError as e:
            logger.error(f"Sea-lion rate limit hit: {e}")
            raise UpstreamRateLimitError(
                "Rate limit exceeded. Please wait before making another request."
            ) from e
        except InternalServerError as e:
            logger.error(f"Sea-lion server error: {e}")
            raise UpstreamServerError("Sea-lion API server error. Please try again later.") from e
        except (APITimeoutError, asyncio.TimeoutError) as e:
            logger.error(f"Sea-lion request timed out after {self.timeout}s")
            raise UpstreamTimeoutError(
                f"Sea-lion API request timed out after {self.timeout:g} seconds."
            ) from e
        except APIStatusError as e:
            logger.error(f"Sea-lion request failed with status {e.status_code}: {e}")
            if e.status_code >= 500:
                raise UpstreamServerError("Sea-lion API server error. Please try again later.") from e
            raise UpstreamError(f"Sea-lion API request failed: {e.message}") from e
        except (APIConnectionError, APIError) as e:
            logger.error(f"Sea-lion request failed: {e}")
            raise UpstreamError(f"Sea-lion API request failed: {e}") from e

        content = None
        if completion.choices:
            message = completion.choices[0].message
            content = message.content if message is not None else None
        if not content:
            raise UpstreamEmptyResponseError()

        logger.debug(
            f"Text generation successful: model={request.model}, length={len(content)}"
        )
        return content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.close()
