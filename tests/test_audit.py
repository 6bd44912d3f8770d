"""Tests for audit logging."""

from unittest.mock import patch

import pytest

from shared.models import ExecutionType, ToolDefinition, ToolName, ToolResultStatus


class TestAuditLogger:
    """Tests for audit entries."""

    def test_audit_entry_creation(self):
        """Test creating audit entries."""
        from shortcut_mcp.audit import AuditLogger

        audit = AuditLogger(enabled=True)
        tool = ToolDefinition(
            name=ToolName.GET_STORY,
            description="Get a specific story by ID",
            execution_type=ExecutionType.READ
        )

        entry = audit.create_entry(
            tool_name="get_story",
            tool=tool,
            parameters={"id": 42},
            request_id="req1",
            execution_time_ms=12.5
        )

        assert entry.tool_name == "get_story"
        assert entry.execution_type == ExecutionType.READ
        assert entry.status == ToolResultStatus.SUCCESS
        assert entry.parameters == {"id": 42}
        assert entry.execution_time_ms == 12.5

    def test_failed_call_entry(self):
        """Test that failures record message and code."""
        from shortcut_mcp.audit import AuditLogger

        entry = AuditLogger().create_entry(
            tool_name="unknown_tool",
            tool=None,
            parameters={},
            request_id="req2",
            execution_time_ms=0.1,
            error="Unknown tool: unknown_tool",
            error_code=-32601
        )

        assert entry.status == ToolResultStatus.ERROR
        assert entry.execution_type is None
        assert entry.error_code == -32601

    def test_sensitive_data_redaction(self):
        """Test that tokens are redacted."""
        from shortcut_mcp.audit import AuditLogger

        entry = AuditLogger().create_entry(
            tool_name="configure",
            tool=None,
            parameters={
                "api_token": "secret123",
                "apiToken": "secret456",
                "base_url": "https://api.app.shortcut.com/api/v3",
                "nested": {"password": "hunter2"},
            },
            request_id="req3",
            execution_time_ms=1.0
        )

        assert entry.parameters["api_token"] == "[REDACTED]"
        assert entry.parameters["apiToken"] == "[REDACTED]"
        assert entry.parameters["nested"]["password"] == "[REDACTED]"
        assert entry.parameters["base_url"] == "https://api.app.shortcut.com/api/v3"

    def test_disabled_logger_is_silent(self):
        """Test that a disabled audit logger emits nothing."""
        from shortcut_mcp import audit as audit_module

        audit = audit_module.AuditLogger(enabled=False)
        entry = audit.create_entry("get_epics", None, {}, "req4", 1.0)

        with patch.object(audit_module, "logger") as mock_logger:
            audit.log(entry)

        mock_logger.info.assert_not_called()
        mock_logger.warning.assert_not_called()


class TestDispatcherAuditing:
    """Tests for auditing around dispatched calls."""

    @pytest.mark.asyncio
    async def test_every_call_is_audited(self, shortcut_api):
        """Test that successes and failures both produce an entry."""
        from shortcut_mcp.audit import AuditLogger
        from shortcut_mcp.dispatcher import ToolDispatcher
        from shortcut_mcp.errors import ToolError

        audit = AuditLogger(enabled=True)
        dispatcher = ToolDispatcher(audit_logger=audit)
        shortcut_api.get("/member").respond(200, json={"id": "abc"})

        with patch.object(audit, "log") as mock_log:
            await dispatcher.call("configure", {"api_token": "secret"})
            with pytest.raises(ToolError):
                await dispatcher.call("no_such_tool", {})

        entries = [call.args[0] for call in mock_log.call_args_list]
        assert [entry.status for entry in entries] == [
            ToolResultStatus.SUCCESS,
            ToolResultStatus.ERROR,
        ]
        assert entries[0].parameters["api_token"] == "[REDACTED]"
        assert entries[1].error == "Unknown tool: no_such_tool"
        await dispatcher.close()
