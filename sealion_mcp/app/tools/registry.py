"""Name → tool mapping, in registration order."""

from typing import Any, Iterator

from sealion_mcp.app.core.logging import get_logger
from sealion_mcp.app.exceptions import ToolNotFoundError
from sealion_mcp.app.tools.base import BaseTool
from sealion_mcp.app.tools.cultural_analysis import CulturalAnalysisTool
from sealion_mcp.app.tools.text_generation import TextGenerationTool
from sealion_mcp.app.tools.translation import TranslationTool

logger = get_logger(__name__)


class ToolRegistry:
    """Holds the tools served by one pipeline.

    Populated at startup and read-only afterwards; iteration and listing
    follow registration order.
    """

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool has that name
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[BaseTool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def create_default_registry() -> ToolRegistry:
    """Registry with the three Sea-lion tools."""
    registry = ToolRegistry()
    for tool in (TextGenerationTool(), TranslationTool(), CulturalAnalysisTool()):
        registry.register(tool)
    logger.info(f"Registered {len(registry)} tools: {', '.join(registry.names())}")
    return registry
