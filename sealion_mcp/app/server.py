"""MCP server exposing the Sea-lion tools over stdio.

Protocol handling is delegated to the ``mcp`` SDK's low-level server. This
module only converts between MCP request/response types and the
:class:`~sealion_mcp.app.services.pipeline.ToolPipeline`.
"""

from typing import Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from sealion_mcp.app.core.logging import get_logger
from sealion_mcp.app.exceptions import SeaLionMCPError
from sealion_mcp.app.services.pipeline import ToolPipeline

logger = get_logger(__name__)

SERVER_INSTRUCTIONS = (
    "Sea-lionMCP: MCP server providing access to Sea-lion Southeast Asian language models"
)


class SeaLionMCPServer:
    """Binds a tool pipeline to an MCP protocol server."""

    def __init__(
        self,
        pipeline: ToolPipeline,
        name: str = "sea-lionmcp",
        version: str = "1.0.0",
        instructions: Optional[str] = SERVER_INSTRUCTIONS,
    ):
        self.pipeline = pipeline
        self.server: Server = Server(name, version=version, instructions=instructions)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        # Registered directly rather than through @server.call_tool(): that
        # decorator turns every exception into an isError result, while
        # pipeline failures must reach the client as classified JSON-RPC errors.
        self.server.request_handlers[types.CallToolRequest] = self.handle_call_tool

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
            )
            for tool in self.pipeline.list_tools()
        ]

    async def handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """Run a ``tools/call`` request through the pipeline.

        Raises:
            McpError: Carrying the classified error payload
        """
        name = request.params.name
        try:
            response = await self.pipeline.call_tool(name, request.params.arguments)
        except SeaLionMCPError as e:
            raise McpError(types.ErrorData(**e.to_error_payload())) from e

        return types.ServerResult(
            types.CallToolResult(
                content=[
                    types.TextContent(type="text", text=block["text"])
                    for block in response["content"]
                ]
            )
        )

    async def test_upstream(self) -> bool:
        """Check upstream reachability; failure only degrades the server."""
        try:
            await self.pipeline.client.test_connection()
        except SeaLionMCPError as e:
            logger.warning(
                "Sea-lion API connection failed - server will start but tools may not work "
                f"without valid API key: {e.message}"
            )
            return False
        except Exception as e:
            logger.warning(
                f"Sea-lion API connection check failed unexpectedly - server will start anyway: {e}",
                exc_info=True,
            )
            return False
        logger.info("Sea-lion API connection verified")
        return True

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Sea-lionMCP Server is running and ready to accept connections")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
