"""Cultural context analysis for Southeast Asian content."""

from typing import Literal, Optional, get_args

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

AnalysisType = Literal[
    "cultural_context",
    "social_norms",
    "business_etiquette",
    "language_usage",
    "religious_sensitivity",
    "generational_differences",
    "regional_variations",
]
ANALYSIS_TYPES: tuple[str, ...] = get_args(AnalysisType)

SeaCountry = Literal[
    "singapore", "malaysia", "indonesia", "thailand", "vietnam",
    "philippines", "myanmar", "cambodia", "laos", "brunei",
]
COUNTRIES: tuple[str, ...] = get_args(SeaCountry)

DetailLevel = Literal["brief", "detailed", "comprehensive"]
DETAIL_LEVELS: tuple[str, ...] = get_args(DetailLevel)

ANALYSIS_TEMPERATURE = 0.4

ANALYSIS_INSTRUCTIONS: dict[str, str] = {
    "cultural_context": "Identify cultural references, meanings, and significance within Southeast Asian contexts.",
    "social_norms": "Analyze how this content relates to social norms, expectations, and behaviors.",
    "business_etiquette": "Evaluate business communication appropriateness and cultural sensitivity.",
    "language_usage": "Examine language choices, formality levels, and cultural appropriateness.",
    "religious_sensitivity": "Assess religious considerations and potential sensitivities.",
    "generational_differences": "Analyze how different generations might perceive this content.",
    "regional_variations": "Compare how this content might be received across different Southeast Asian regions.",
}

DETAIL_INSTRUCTIONS: dict[str, str] = {
    "brief": "Provide a concise analysis with key points only.",
    "detailed": "Provide a thorough analysis with examples and context.",
    "comprehensive": (
        "Provide an in-depth analysis with extensive examples, historical context, "
        "and cross-cultural comparisons."
    ),
}

DETAIL_MAX_TOKENS: dict[str, int] = {
    "brief": 256,
    "detailed": 512,
    "comprehensive": 1024,
}


class CulturalAnalysisArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    content: str = Field(min_length=1)
    analysis_type: AnalysisType = "cultural_context"
    target_country: Optional[SeaCountry] = None
    model: ModelAlias = "v3.5"
    include_recommendations: bool = True
    detail_level: DetailLevel = "detailed"


def build_system_prompt(args: CulturalAnalysisArgs) -> str:
    if args.target_country:
        country_context = f" with specific focus on {args.target_country.capitalize()}"
    else:
        country_context = " across Southeast Asian cultures"

    prompt = (
        "You are a Southeast Asian cultural expert with deep understanding of the region's diverse "
        "cultures, social norms, business practices, and cultural sensitivities. You specialize in "
        f"providing accurate cultural analysis and context for content{country_context}."
    )
    if args.include_recommendations:
        prompt += " Include practical recommendations and actionable insights."
    return prompt


def build_analysis_prompt(args: CulturalAnalysisArgs) -> str:
    topic = args.analysis_type.replace("_", " ")
    return (
        f"Please analyze the following content for {topic}:\n\n"
        f"\"{args.content}\"\n\n"
        f"{ANALYSIS_INSTRUCTIONS[args.analysis_type]} {DETAIL_INSTRUCTIONS[args.detail_level]}"
    )


class CulturalAnalysisTool(BaseTool):
    name = "sealion_cultural_analysis"
    kind = ToolKind.CULTURAL_ANALYSIS
    label = "Cultural analysis"
    description = (
        "Analyze content for Southeast Asian cultural context, social norms, and sensitivities. "
        "Provides insights on cultural appropriateness, business etiquette, language usage, and "
        f"regional variations across {', '.join(COUNTRIES)}."
    )
    input_model = CulturalAnalysisArgs
    params = (
        ParamSpec("content", ParamKind.STRING, "Content to analyze", required=True, min_length=1),
        ParamSpec("analysis_type", ParamKind.ENUM, "Aspect of culture to analyze",
                  default="cultural_context", choices=ANALYSIS_TYPES),
        ParamSpec("target_country", ParamKind.ENUM,
                  "Specific Southeast Asian country for focused analysis", choices=COUNTRIES),
        ParamSpec("model", ParamKind.ENUM, "Model version", default="v3.5", choices=MODEL_CHOICES),
        ParamSpec("include_recommendations", ParamKind.BOOLEAN,
                  "Include actionable recommendations", default=True),
        ParamSpec("detail_level", ParamKind.ENUM, "Depth of the analysis",
                  default="detailed", choices=DETAIL_LEVELS),
    )

    async def execute(self, args: CulturalAnalysisArgs, client: BaseProvider) -> str:
        model = resolve_model(args.model)
        request = ChatCompletionRequest(
            model=model.value,
            messages=[
                ChatMessage(role="system", content=build_system_prompt(args)),
                ChatMessage(role="user", content=build_analysis_prompt(args)),
            ],
            max_tokens=DETAIL_MAX_TOKENS[args.detail_level],
            temperature=ANALYSIS_TEMPERATURE,
            extra_body=thinking_mode_extra_body(True) if supports_thinking_mode(model) else None,
        )
        return await client.generate_text(request)
