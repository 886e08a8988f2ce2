"""Upstream providers package for the Sea-lion MCP server.

This package provides:
- Base provider interface (BaseProvider)
- Sea-lion API client (SeaLionProvider)
- Mock provider for development and tests (MockProvider)
- Request types and model identifiers (ChatCompletionRequest, SeaLionModel)
"""

from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.providers.mock import MockProvider
from sealion_mcp.app.providers.models import (
    MODEL_ALIASES,
    ChatCompletionRequest,
    ChatMessage,
    ModelAlias,
    SeaLionModel,
    get_available_models,
    is_model_available,
    resolve_model,
    supports_thinking_mode,
    thinking_mode_extra_body,
)
from sealion_mcp.app.providers.sealion import SeaLionProvider

__all__ = [
    # Base
    "BaseProvider",
    # Providers
    "SeaLionProvider",
    "MockProvider",
    # Models
    "MODEL_ALIASES",
    "ChatCompletionRequest",
    "ChatMessage",
    "ModelAlias",
    "SeaLionModel",
    "get_available_models",
    "is_model_available",
    "resolve_model",
    "supports_thinking_mode",
    "thinking_mode_extra_body",
]
