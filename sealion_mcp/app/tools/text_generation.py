"""Free-form text generation with the Sea-lion models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sealion_mcp.app.providers.base import BaseProvider
from sealion_mcp.app.providers.models import (
    ChatCompletionRequest,
    ChatMessage,
    ModelAlias,
    resolve_model,
    supports_thinking_mode,
    thinking_mode_extra_body,
)
from sealion_mcp.app.tools.base import BaseTool, ParamKind, ParamSpec, ToolKind

MODEL_CHOICES = ("v3", "v3.5")


class TextGenerationArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    prompt: str = Field(min_length=1, max_length=10000)
    model: ModelAlias = "v3.5"
    max_tokens: int = Field(default=512, ge=1, le=4096)
    temperature: float = Field(default=0.7, ge=0, le=2)
    thinking_mode: bool = True
    system_prompt: Optional[str] = Field(default=None, max_length=5000)


class TextGenerationTool(BaseTool):
    name = "sealion_generate_text"
    kind = ToolKind.TEXT_GENERATION
    label = "Text generation"
    description = (
        "Generate text using Sea-lion Southeast Asian language models. Supports both "
        "standard and reasoning modes with model switching between v3 and v3.5."
    )
    input_model = TextGenerationArgs
    params = (
        ParamSpec("prompt", ParamKind.STRING, "Prompt to complete",
                  required=True, min_length=1, max_length=10000),
        ParamSpec("model", ParamKind.ENUM, "Model version", default="v3.5", choices=MODEL_CHOICES),
        ParamSpec("max_tokens", ParamKind.INTEGER, "Maximum tokens to generate",
                  default=512, minimum=1, maximum=4096),
        ParamSpec("temperature", ParamKind.NUMBER, "Sampling temperature",
                  default=0.7, minimum=0, maximum=2),
        ParamSpec("thinking_mode", ParamKind.BOOLEAN, "Enable reasoning mode for v3.5 models",
                  default=True),
        ParamSpec("system_prompt", ParamKind.STRING, "Optional system prompt for context",
                  max_length=5000),
    )

    async def execute(self, args: TextGenerationArgs, client: BaseProvider) -> str:
        model = resolve_model(args.model)

        messages = []
        if args.system_prompt:
            messages.append(ChatMessage(role="system", content=args.system_prompt))
        messages.append(ChatMessage(role="user", content=args.prompt))

        request = ChatCompletionRequest(
            model=model.value,
            messages=messages,
            max_tokens=args.max_tokens,
            temperature=args.temperature,
            extra_body=(
                thinking_mode_extra_body(args.thinking_mode)
                if supports_thinking_mode(model)
                else None
            ),
        )
        return await client.generate_text(request)
