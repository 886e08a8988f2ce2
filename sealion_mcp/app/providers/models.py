"""Request types and model identifiers for the Sea-lion chat API."""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel


class SeaLionModel(str, Enum):
    """Model identifiers accepted by the Sea-lion API."""
    V3_9B_IT = "aisingapore/Gemma-SEA-LION-v3-9B-IT"
    V3_5_8B_R = "aisingapore/Llama-SEA-LION-v3.5-8B-R"


# Tool-facing aliases for the two model variants
ModelAlias = Literal["v3", "v3.5"]

MODEL_ALIASES: dict[str, SeaLionModel] = {
    "v3": SeaLionModel.V3_9B_IT,
    "v3.5": SeaLionModel.V3_5_8B_R,
}

# Only the reasoning variant understands the thinking-mode switch
REASONING_MODELS = frozenset({SeaLionModel.V3_5_8B_R})


def resolve_model(alias: str) -> SeaLionModel:
    """Map a tool ``model`` argument to the upstream identifier."""
    try:
        return MODEL_ALIASES[alias]
    except KeyError:
        raise ValueError(f"Unknown model alias: {alias}") from None


def supports_thinking_mode(model: SeaLionModel) -> bool:
    return model in REASONING_MODELS


def thinking_mode_extra_body(enabled: bool) -> dict[str, Any]:
    """Extra request fields that toggle thinking mode on the reasoning model."""
    return {"chat_template_kwargs": {"thinking_mode": "on" if enabled else "off"}}


def get_available_models() -> list[str]:
    return [model.value for model in SeaLionModel]


def is_model_available(model: str) -> bool:
    return model in get_available_models()


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Normalized request sent to the chat-completion endpoint.

    Built fresh for every tool call and never retained.
    """
    model: str
    messages: list[ChatMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    extra_body: Optional[dict[str, Any]] = None

    @property
    def thinking_mode(self) -> Optional[str]:
        """The requested thinking mode ("on"/"off"), if any."""
        if not self.extra_body:
            return None
        return self.extra_body.get("chat_template_kwargs", {}).get("thinking_mode")
