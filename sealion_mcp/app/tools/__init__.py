"""Tools exposed over MCP.

- Tool contract and schema descriptors (BaseTool, ParamSpec, ToolKind)
- Text generation, translation and cultural analysis tools
- Tool registry (ToolRegistry, create_default_registry)
"""

from sealion_mcp.app.tools.base import BaseTool, ParamKind, ParamSpec, ToolKind, build_input_schema
from sealion_mcp.app.tools.cultural_analysis import CulturalAnalysisArgs, CulturalAnalysisTool
from sealion_mcp.app.tools.registry import ToolRegistry, create_default_registry
from sealion_mcp.app.tools.text_generation import TextGenerationArgs, TextGenerationTool
from sealion_mcp.app.tools.translation import TranslationArgs, TranslationTool

__all__ = [
    "BaseTool",
    "ParamKind",
    "ParamSpec",
    "ToolKind",
    "build_input_schema",
    "TextGenerationArgs",
    "TextGenerationTool",
    "TranslationArgs",
    "TranslationTool",
    "CulturalAnalysisArgs",
    "CulturalAnalysisTool",
    "ToolRegistry",
    "create_default_registry",
]
