"""Errors raised by the tool dispatcher.

Every failure a caller can observe is a :class:`ToolError`; its code is
one of the JSON-RPC error codes defined by the MCP SDK.
"""

from enum import IntEnum

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData


class ToolErrorCode(IntEnum):
    INVALID_REQUEST = INVALID_REQUEST
    METHOD_NOT_FOUND = METHOD_NOT_FOUND
    INTERNAL_ERROR = INTERNAL_ERROR


class ToolError(Exception):
    """A dispatcher failure, reported to the host as an MCP error."""

    def __init__(self, code: ToolErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)

    @classmethod
    def not_configured(cls) -> "ToolError":
        return cls(
            ToolErrorCode.INVALID_REQUEST,
            "Shortcut API not configured. Please run configure first."
        )

    @classmethod
    def configuration_failed(cls, cause: BaseException) -> "ToolError":
        return cls(
            ToolErrorCode.INVALID_REQUEST,
            f"Failed to configure Shortcut API: {cause}"
        )

    @classmethod
    def unknown_tool(cls, name: str) -> "ToolError":
        return cls(ToolErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}")

    @classmethod
    def execution_failed(cls, name: str, cause: BaseException) -> "ToolError":
        return cls(ToolErrorCode.INTERNAL_ERROR, f"Error executing {name}: {cause}")

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=int(self.code), message=self.message))
