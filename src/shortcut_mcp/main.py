"""Shortcut MCP Server - stdio entry point.

Wires the tool dispatcher into the MCP SDK's low-level server and serves
it over stdin/stdout. Logs go to stderr.
"""

import asyncio
from typing import Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging
from shortcut_mcp.audit import AuditLogger
from shortcut_mcp.dispatcher import ToolDispatcher
from shortcut_mcp.errors import ToolError

logger = get_logger(__name__)


def create_server(dispatcher: ToolDispatcher, settings: Settings) -> Server:
    """
    Build the MCP server around a dispatcher.

    Tool calls are registered as a raw request handler, so a ToolError
    reaches the host as a JSON-RPC error with its code rather than as an
    ``isError`` result.

    Args:
        dispatcher: Dispatcher owning the Shortcut client
        settings: Application settings

    Returns:
        A server ready to be run on any transport
    """
    server = Server(settings.server.name, version=settings.server.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        try:
            text = await dispatcher.call(req.params.name, req.params.arguments)
        except ToolError as e:
            # Raised McpErrors become JSON-RPC error responses
            raise e.to_mcp_error() from e
        return types.ServerResult(
            types.CallToolResult(content=[types.TextContent(type="text", text=text)])
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(settings: Optional[Settings] = None) -> None:
    """Run the server on stdio until the host closes the stream."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    dispatcher = ToolDispatcher(
        audit_logger=AuditLogger(enabled=settings.server.enable_audit),
        settings=settings.shortcut,
    )
    server = create_server(dispatcher, settings)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "Shortcut MCP server running on stdio",
                server=settings.server.name,
                version=settings.server.version,
                environment=settings.environment
            )
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        await dispatcher.close()
        logger.info("Shortcut MCP server stopped")


def main() -> None:
    """Run the Shortcut MCP server."""
    asyncio.run(serve())


if __name__ == "__main__":
    main()
