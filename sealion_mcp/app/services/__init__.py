"""Services package for the MCP server.

This package provides:
- Input/output sanitization rules
- The tool-call request pipeline
"""

from sealion_mcp.app.services.pipeline import ToolPipeline, text_response
from sealion_mcp.app.services.sanitizer import (
    INPUT_RULES,
    OUTPUT_RULES,
    REDACTED,
    SanitizationRule,
    sanitize_input,
    sanitize_output,
)

__all__ = [
    "ToolPipeline",
    "text_response",
    "INPUT_RULES",
    "OUTPUT_RULES",
    "REDACTED",
    "SanitizationRule",
    "sanitize_input",
    "sanitize_output",
]
