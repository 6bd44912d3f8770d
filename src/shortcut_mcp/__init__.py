"""Shortcut MCP Server - tool catalog, configuration gate and routing.

Exposes the Shortcut API as MCP tools. The dispatcher refuses every
tool but ``configure`` until a verified client exists.
"""

from shortcut_mcp.registry import ToolRegistry
from shortcut_mcp.dispatcher import ToolDispatcher
from shortcut_mcp.errors import ToolError, ToolErrorCode
from shortcut_mcp.audit import AuditLogger

__all__ = [
    "ToolRegistry",
    "ToolDispatcher",
    "ToolError",
    "ToolErrorCode",
    "AuditLogger",
]
