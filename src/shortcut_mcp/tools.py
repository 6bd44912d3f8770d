"""Tool catalog for the Shortcut MCP server.

One declarative definition per :class:`ToolName`, in the order the
tools are advertised to the host.
"""

from typing import Any

from shared.config import DEFAULT_BASE_URL
from shared.models import ExecutionType, ToolDefinition, ToolName


def _id_property(entity: str) -> dict[str, Any]:
    return {"type": "number", "description": f"{entity} ID"}


NO_ARGUMENTS: dict[str, Any] = {"type": "object", "properties": {}}

STORY_TYPE = {
    "type": "string",
    "enum": ["feature", "bug", "chore"],
    "description": "Type of story"
}

OWNER_IDS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Array of owner IDs"
}


CATALOG: list[ToolDefinition] = [
    ToolDefinition(
        name=ToolName.CONFIGURE,
        description="Configure Shortcut API connection with API token",
        input_schema={
            "type": "object",
            "properties": {
                "api_token": {
                    "type": "string",
                    "description": "Shortcut API token"
                },
                "base_url": {
                    "type": "string",
                    "description": "Base URL for Shortcut API (optional)",
                    "default": DEFAULT_BASE_URL
                }
            },
            "required": ["api_token"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Stories
    ToolDefinition(
        name=ToolName.GET_STORIES,
        description="Get stories with optional filtering",
        input_schema={
            "type": "object",
            "properties": {
                "project_id": {"type": "number", "description": "Filter by project ID"},
                "epic_id": {"type": "number", "description": "Filter by epic ID"},
                "workflow_state_id": {
                    "type": "number",
                    "description": "Filter by workflow state ID"
                },
                "includes_description": {
                    "type": "boolean",
                    "description": "Include story descriptions"
                }
            }
        }
    ),
    ToolDefinition(
        name=ToolName.GET_STORY,
        description="Get a specific story by ID",
        input_schema={
            "type": "object",
            "properties": {"id": _id_property("Story")},
            "required": ["id"]
        }
    ),
    ToolDefinition(
        name=ToolName.CREATE_STORY,
        description="Create a new story",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Story name"},
                "description": {"type": "string", "description": "Story description"},
                "story_type": STORY_TYPE,
                "project_id": {"type": "number", "description": "Project ID"},
                "epic_id": {"type": "number", "description": "Epic ID"},
                "estimate": {"type": "number", "description": "Story point estimate"},
                "workflow_state_id": {"type": "number", "description": "Workflow state ID"},
                "owner_ids": OWNER_IDS
            },
            "required": ["name"]
        },
        execution_type=ExecutionType.WRITE
    ),
    ToolDefinition(
        name=ToolName.UPDATE_STORY,
        description="Update an existing story",
        input_schema={
            "type": "object",
            "properties": {
                "id": _id_property("Story"),
                "name": {"type": "string", "description": "Story name"},
                "description": {"type": "string", "description": "Story description"},
                "story_type": STORY_TYPE,
                "project_id": {"type": "number", "description": "Project ID"},
                "epic_id": {"type": "number", "description": "Epic ID"},
                "workflow_state_id": {"type": "number", "description": "Workflow state ID"},
                "estimate": {"type": "number", "description": "Story point estimate"},
                "owner_ids": OWNER_IDS
            },
            "required": ["id"]
        },
        execution_type=ExecutionType.WRITE
    ),
    ToolDefinition(
        name=ToolName.DELETE_STORY,
        description="Delete a story",
        input_schema={
            "type": "object",
            "properties": {"id": _id_property("Story")},
            "required": ["id"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Epics
    ToolDefinition(
        name=ToolName.GET_EPICS,
        description="Get all epics",
        input_schema=NO_ARGUMENTS
    ),
    ToolDefinition(
        name=ToolName.GET_EPIC,
        description="Get a specific epic by ID",
        input_schema={
            "type": "object",
            "properties": {"id": _id_property("Epic")},
            "required": ["id"]
        }
    ),
    ToolDefinition(
        name=ToolName.CREATE_EPIC,
        description="Create a new epic",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Epic name"},
                "description": {"type": "string", "description": "Epic description"},
                "state": {"type": "string", "description": "Epic state"}
            },
            "required": ["name"]
        },
        execution_type=ExecutionType.WRITE
    ),
    ToolDefinition(
        name=ToolName.UPDATE_EPIC,
        description="Update an existing epic",
        input_schema={
            "type": "object",
            "properties": {
                "id": _id_property("Epic"),
                "name": {"type": "string", "description": "Epic name"},
                "description": {"type": "string", "description": "Epic description"},
                "state": {"type": "string", "description": "Epic state"}
            },
            "required": ["id"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Projects
    ToolDefinition(
        name=ToolName.GET_PROJECTS,
        description="Get all projects",
        input_schema=NO_ARGUMENTS
    ),
    ToolDefinition(
        name=ToolName.GET_PROJECT,
        description="Get a specific project by ID",
        input_schema={
            "type": "object",
            "properties": {"id": _id_property("Project")},
            "required": ["id"]
        }
    ),
    ToolDefinition(
        name=ToolName.CREATE_PROJECT,
        description="Create a new project",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Project name"},
                "description": {"type": "string", "description": "Project description"},
                "team_id": {"type": "number", "description": "Team ID"}
            },
            "required": ["name", "team_id"]
        },
        execution_type=ExecutionType.WRITE
    ),
    ToolDefinition(
        name=ToolName.UPDATE_PROJECT,
        description="Update an existing project",
        input_schema={
            "type": "object",
            "properties": {
                "id": _id_property("Project"),
                "name": {"type": "string", "description": "Project name"},
                "description": {"type": "string", "description": "Project description"}
            },
            "required": ["id"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Members
    ToolDefinition(
        name=ToolName.GET_MEMBERS,
        description="Get all workspace members",
        input_schema=NO_ARGUMENTS
    ),
    ToolDefinition(
        name=ToolName.GET_CURRENT_MEMBER,
        description="Get current authenticated member info",
        input_schema=NO_ARGUMENTS
    ),

    # Labels
    ToolDefinition(
        name=ToolName.GET_LABELS,
        description="Get all labels",
        input_schema=NO_ARGUMENTS
    ),
    ToolDefinition(
        name=ToolName.CREATE_LABEL,
        description="Create a new label",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Label name"},
                "color": {"type": "string", "description": "Label color (hex format)"},
                "description": {"type": "string", "description": "Label description"}
            },
            "required": ["name"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Iterations
    ToolDefinition(
        name=ToolName.GET_ITERATIONS,
        description="Get all iterations",
        input_schema=NO_ARGUMENTS
    ),
    ToolDefinition(
        name=ToolName.GET_ITERATION,
        description="Get a specific iteration by ID",
        input_schema={
            "type": "object",
            "properties": {"id": _id_property("Iteration")},
            "required": ["id"]
        }
    ),
    ToolDefinition(
        name=ToolName.CREATE_ITERATION,
        description="Create a new iteration",
        input_schema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Iteration name"},
                "start_date": {"type": "string", "description": "Start date (YYYY-MM-DD)"},
                "end_date": {"type": "string", "description": "End date (YYYY-MM-DD)"},
                "description": {"type": "string", "description": "Iteration description"}
            },
            "required": ["name", "start_date", "end_date"]
        },
        execution_type=ExecutionType.WRITE
    ),

    # Search and workflows
    ToolDefinition(
        name=ToolName.SEARCH,
        description="Search across Shortcut entities",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "detail": {
                    "type": "string",
                    "enum": ["full", "slim"],
                    "description": "Level of detail in results",
                    "default": "full"
                }
            },
            "required": ["query"]
        }
    ),
    ToolDefinition(
        name=ToolName.GET_WORKFLOWS,
        description="Get all workflows",
        input_schema=NO_ARGUMENTS
    ),
]
