"""Translation between Southeast Asian languages with cultural context."""

from typing import Literal, get_args

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
from sealion_mcp.app.tools.text_generation import MODEL_CHOICES

SupportedLanguage = Literal[
    "english", "indonesian", "thai", "vietnamese", "filipino",
    "malay", "burmese", "khmer", "lao", "tamil", "chinese",
]
SUPPORTED_LANGUAGES: tuple[str, ...] = get_args(SupportedLanguage)

# Fixed low temperature keeps translations consistent between calls
TRANSLATION_TEMPERATURE = 0.3
MIN_TRANSLATION_TOKENS = 256


class TranslationArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    text: str = Field(min_length=1, max_length=5000)
    source_language: SupportedLanguage
    target_language: SupportedLanguage
    model: ModelAlias = "v3.5"
    preserve_cultural_context: bool = True
    formal_register: bool = False


def translation_token_budget(text: str) -> int:
    return max(len(text) * 2, MIN_TRANSLATION_TOKENS)


def build_system_prompt(args: TranslationArgs) -> str:
    prompt = (
        "You are an expert translator specializing in Southeast Asian languages and cultures. "
        "You understand the cultural nuances, idioms, and context-specific meanings of each language."
    )
    if args.preserve_cultural_context:
        prompt += " Please preserve cultural nuances, idioms, and context-specific meanings."
    if args.formal_register:
        prompt += " Use formal language register appropriate for professional or academic contexts."
    return prompt


def build_user_prompt(args: TranslationArgs) -> str:
    return (
        f"Translate the following text from {args.source_language} to {args.target_language}:\n\n"
        f"\"{args.text}\"\n\n"
        "Provide only the translation without additional explanations."
    )


class TranslationTool(BaseTool):
    name = "sealion_translate"
    kind = ToolKind.TRANSLATION
    label = "Translation"
    description = (
        "Translate text between Southeast Asian languages using Sea-lion models. "
        f"Supports: {', '.join(SUPPORTED_LANGUAGES)}. "
        "Preserves cultural context and nuances specific to Southeast Asian cultures."
    )
    input_model = TranslationArgs
    params = (
        ParamSpec("text", ParamKind.STRING, "Text to translate",
                  required=True, min_length=1, max_length=5000),
        ParamSpec("source_language", ParamKind.ENUM, "Language of the input text",
                  required=True, choices=SUPPORTED_LANGUAGES),
        ParamSpec("target_language", ParamKind.ENUM, "Language to translate into",
                  required=True, choices=SUPPORTED_LANGUAGES),
        ParamSpec("model", ParamKind.ENUM, "Model version", default="v3.5", choices=MODEL_CHOICES),
        ParamSpec("preserve_cultural_context", ParamKind.BOOLEAN,
                  "Maintain cultural nuances in translation", default=True),
        ParamSpec("formal_register", ParamKind.BOOLEAN, "Use formal language register",
                  default=False),
    )

    async def execute(self, args: TranslationArgs, client: BaseProvider) -> str:
        if args.source_language == args.target_language:
            return f"The text is already in {args.target_language}. Original text: {args.text}"

        model = resolve_model(args.model)
        request = ChatCompletionRequest(
            model=model.value,
            messages=[
                ChatMessage(role="system", content=build_system_prompt(args)),
                ChatMessage(role="user", content=build_user_prompt(args)),
            ],
            max_tokens=translation_token_budget(args.text),
            temperature=TRANSLATION_TEMPERATURE,
            # Reasoning improves translation quality on v3.5
            extra_body=thinking_mode_extra_body(True) if supports_thinking_mode(model) else None,
        )
        return await client.generate_text(request)
