"""Tool Registry for the Shortcut MCP server.

Holds the static tool catalog, keyed by :class:`ToolName`, and resolves
the names the host sends.
"""

from typing import Optional

from mcp.types import Tool

from shared.logging import get_logger
from shared.models import ToolDefinition, ToolName

logger = get_logger(__name__)


class ToolRegistry:
    """
    Registry for the advertised tools.

    Responsibilities:
    - Register tool definitions
    - Resolve tool names sent by the host
    - Check that every tool name has exactly one definition
    """

    def __init__(self, tools: Optional[list[ToolDefinition]] = None) -> None:
        self._tools: dict[ToolName, ToolDefinition] = {}
        if tools:
            self.register_many(tools)

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool definition to register

        Raises:
            ValueError: If tool name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name.value}' is already registered")

        self._tools[tool.name] = tool
        logger.debug(
            "Tool registered",
            tool=tool.name.value,
            execution_type=tool.execution_type.value
        )

    def register_many(self, tools: list[ToolDefinition]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def resolve(self, name: str) -> Optional[ToolName]:
        """Map a wire name onto its enumeration member, if it is registered."""
        try:
            tool_name = ToolName(name)
        except ValueError:
            return None
        return tool_name if tool_name in self._tools else None

    def get(self, name: ToolName) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDefinition]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def to_mcp_tools(self) -> list[Tool]:
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def ensure_complete(self) -> None:
        """
        Verify that every tool name has a definition.

        Raises:
            RuntimeError: If any tool name is missing from the registry
        """
        missing = [name.value for name in ToolName if name not in self._tools]
        if missing:
            raise RuntimeError(f"Tools without a definition: {', '.join(missing)}")


# Global registry instance
_registry: Optional[ToolRegistry] = None


def get_registry() -> ToolRegistry:
    """Get the global registry, populated with the full catalog."""
    global _registry
    if _registry is None:
        from shortcut_mcp.tools import CATALOG

        _registry = ToolRegistry(CATALOG)
        _registry.ensure_complete()
    return _registry
