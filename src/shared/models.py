"""Core data models for the Shortcut MCP server.

Shortcut entities are loosely shaped: every record model declares the
handful of fields the server relies on and keeps whatever else the API
sends in ``model_extra``. Dumping a record with :func:`dump_record` emits
exactly the keys that were received, so records pass through unchanged.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict, Field


class ToolName(str, Enum):
    """Every tool the server advertises."""
    CONFIGURE = "configure"
    GET_STORIES = "get_stories"
    GET_STORY = "get_story"
    CREATE_STORY = "create_story"
    UPDATE_STORY = "update_story"
    DELETE_STORY = "delete_story"
    GET_EPICS = "get_epics"
    GET_EPIC = "get_epic"
    CREATE_EPIC = "create_epic"
    UPDATE_EPIC = "update_epic"
    GET_PROJECTS = "get_projects"
    GET_PROJECT = "get_project"
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    GET_MEMBERS = "get_members"
    GET_CURRENT_MEMBER = "get_current_member"
    GET_LABELS = "get_labels"
    CREATE_LABEL = "create_label"
    GET_ITERATIONS = "get_iterations"
    GET_ITERATION = "get_iteration"
    CREATE_ITERATION = "create_iteration"
    SEARCH = "search"
    GET_WORKFLOWS = "get_workflows"


class ExecutionType(str, Enum):
    """Type of tool execution - read operations vs write operations."""
    READ = "read"
    WRITE = "write"


class StoryType(str, Enum):
    FEATURE = "feature"
    BUG = "bug"
    CHORE = "chore"


class SearchDetail(str, Enum):
    FULL = "full"
    SLIM = "slim"


class ToolDefinition(BaseModel):
    """
    Complete definition of an MCP tool.

    Tools are declarative and discoverable; the catalog holds exactly one
    definition per :class:`ToolName`.
    """
    name: ToolName
    description: str = Field(..., description="Clear description for LLM usage")
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for the tool arguments"
    )
    execution_type: ExecutionType = Field(default=ExecutionType.READ)

    def to_mcp_tool(self) -> Tool:
        """Render the definition in the MCP wire format."""
        return Tool(
            name=self.name.value,
            description=self.description,
            inputSchema=self.input_schema,
        )


class ShortcutConfig(BaseModel):
    """Connection settings supplied by the host through ``configure``."""
    api_token: str = Field(..., min_length=1, repr=False)
    base_url: Optional[str] = None


# Shortcut records

class ShortcutRecord(BaseModel):
    """Base for records returned by the Shortcut API."""
    model_config = ConfigDict(extra="allow")


class Label(ShortcutRecord):
    id: int
    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class Story(ShortcutRecord):
    id: int
    name: str
    description: Optional[str] = None
    story_type: Optional[str] = None
    workflow_state_id: Optional[int] = None
    project_id: Optional[int] = None
    epic_id: Optional[int] = None
    estimate: Optional[int] = None
    owner_ids: Optional[list[str]] = None
    labels: Optional[list[Label]] = None


class Epic(ShortcutRecord):
    id: int
    name: str
    description: Optional[str] = None
    state: Optional[str] = None


class Project(ShortcutRecord):
    id: int
    name: str
    description: Optional[str] = None
    team_id: Optional[int] = None


class MemberProfile(ShortcutRecord):
    name: Optional[str] = None
    mention_name: Optional[str] = None
    email_address: Optional[str] = None


class Member(ShortcutRecord):
    id: str
    profile: Optional[MemberProfile] = None


class Iteration(ShortcutRecord):
    id: int
    name: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class Workflow(ShortcutRecord):
    id: int
    name: str
    states: Optional[list[dict[str, Any]]] = None


def dump_record(data: Any) -> Any:
    """Convert records (or lists of them) back into plain JSON values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_unset=True)
    if isinstance(data, list):
        return [dump_record(item) for item in data]
    return data


class ToolResultStatus(str, Enum):
    """Status of tool execution."""
    SUCCESS = "success"
    ERROR = "error"


class AuditEntry(BaseModel):
    """
    Audit log entry for tool executions.

    Captures tool, parameters, timestamp, and result.
    """
    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    tool_name: str
    execution_type: Optional[ExecutionType] = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    status: ToolResultStatus
    error: Optional[str] = None
    error_code: Optional[int] = None
    execution_time_ms: float = 0

    request_id: str
