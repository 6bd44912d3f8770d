"""Audit logging for the Shortcut MCP server.

Logs every tool execution: tool, parameters, result and duration.
Entries only go to the structured log; nothing is persisted locally.
"""

import uuid
from typing import Any, Optional

from shared.logging import get_logger
from shared.models import AuditEntry, ToolDefinition, ToolResultStatus

logger = get_logger(__name__)


class AuditLogger:
    """
    Audit logger for MCP tool executions.

    All tool executions are logged with:
    - Tool name and execution type
    - Parameters (with sensitive data redacted)
    - Timestamp
    - Result status and duration
    """

    # Parameters that should be redacted in audit logs
    SENSITIVE_PARAMS = {
        "api_token", "apitoken", "token", "password", "secret", "api_key", "apikey", "credential"
    }

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def _redact_sensitive(self, params: dict[str, Any]) -> dict[str, Any]:
        """Redact sensitive parameters from audit logs."""
        redacted = {}
        for key, value in params.items():
            if key.lower() in self.SENSITIVE_PARAMS:
                redacted[key] = "[REDACTED]"
            elif isinstance(value, dict):
                redacted[key] = self._redact_sensitive(value)
            else:
                redacted[key] = value
        return redacted

    def create_entry(
        self,
        tool_name: str,
        tool: Optional[ToolDefinition],
        parameters: dict[str, Any],
        request_id: str,
        execution_time_ms: float,
        error: Optional[str] = None,
        error_code: Optional[int] = None
    ) -> AuditEntry:
        """
        Create an audit entry from tool execution data.

        Args:
            tool_name: Name the host called, registered or not
            tool: Tool definition, when the name resolved to one
            parameters: Arguments as received
            request_id: Identifier of this call
            execution_time_ms: Wall time spent handling the call
            error: Failure message, if the call failed
            error_code: MCP error code, if the call failed

        Returns:
            Audit entry
        """
        return AuditEntry(
            id=str(uuid.uuid4()),
            tool_name=tool_name,
            execution_type=tool.execution_type if tool else None,
            parameters=self._redact_sensitive(parameters),
            status=ToolResultStatus.ERROR if error else ToolResultStatus.SUCCESS,
            error=error,
            error_code=error_code,
            execution_time_ms=execution_time_ms,
            request_id=request_id,
        )

    def log(self, entry: AuditEntry) -> None:
        """Emit an audit entry."""
        if not self.enabled:
            return

        log = logger.warning if entry.status is ToolResultStatus.ERROR else logger.info
        log(
            "Tool executed",
            audit_id=entry.id,
            tool=entry.tool_name,
            execution_type=entry.execution_type.value if entry.execution_type else None,
            parameters=entry.parameters,
            status=entry.status.value,
            error=entry.error,
            execution_time_ms=round(entry.execution_time_ms, 2)
        )
