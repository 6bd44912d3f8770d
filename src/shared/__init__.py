"""Shared utilities and base classes for the Shortcut MCP server."""

from shared.models import (
    AuditEntry,
    ExecutionType,
    ShortcutConfig,
    ToolDefinition,
    ToolName,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "AuditEntry",
    "ExecutionType",
    "ShortcutConfig",
    "ToolDefinition",
    "ToolName",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
