"""Tool Dispatcher for the Shortcut MCP server.

Gates every call on the configuration state, routes it to the matching
Shortcut API operation and formats the result as text.
"""

import json
import time
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from mcp.types import Tool

from shared.config import ShortcutSettings
from shared.logging import bind_context, clear_context, get_logger
from shared.models import ShortcutConfig, ToolName, dump_record
from shortcut_api.client import ShortcutClient
from shortcut_mcp.arguments import (
    ConfigureArguments,
    EntityId,
    EpicFields,
    EpicUpdate,
    IterationFields,
    LabelFields,
    ProjectFields,
    ProjectUpdate,
    SearchQuery,
    StoryFields,
    StoryFilters,
    StoryUpdate,
)
from shortcut_mcp.audit import AuditLogger
from shortcut_mcp.errors import ToolError
from shortcut_mcp.registry import ToolRegistry, get_registry

logger = get_logger(__name__)


@dataclass(frozen=True)
class Unconfigured:
    """No client yet: only ``configure`` may run."""


@dataclass(frozen=True)
class Configured:
    """A verified client is live."""
    client: ShortcutClient


DispatcherState = Union[Unconfigured, Configured]

ClientFactory = Callable[..., ShortcutClient]
Handler = Callable[[ShortcutClient, dict[str, Any]], Awaitable[str]]


def format_json(data: Any) -> str:
    """Pretty-print a Shortcut response."""
    return json.dumps(dump_record(data), indent=2)


def confirm(message: str, data: Any) -> str:
    return f"{message}\n{format_json(data)}"


class ToolDispatcher:
    """
    Routes MCP tool calls to the Shortcut API.

    Responsibilities:
    - Advertise the tool catalog
    - Hold the single live client and refuse calls until it exists
    - Route each call to its handler and format the result
    - Convert every failure into a :class:`ToolError`
    - Audit all executions
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[ShortcutSettings] = None,
        client_factory: ClientFactory = ShortcutClient
    ) -> None:
        self.registry = registry or get_registry()
        self.audit_logger = audit_logger or AuditLogger()
        self.settings = settings or ShortcutSettings()
        self._client_factory = client_factory
        self._state: DispatcherState = Unconfigured()

        self._handlers: dict[ToolName, Handler] = {
            ToolName.GET_STORIES: self._get_stories,
            ToolName.GET_STORY: self._get_story,
            ToolName.CREATE_STORY: self._create_story,
            ToolName.UPDATE_STORY: self._update_story,
            ToolName.DELETE_STORY: self._delete_story,
            ToolName.GET_EPICS: self._get_epics,
            ToolName.GET_EPIC: self._get_epic,
            ToolName.CREATE_EPIC: self._create_epic,
            ToolName.UPDATE_EPIC: self._update_epic,
            ToolName.GET_PROJECTS: self._get_projects,
            ToolName.GET_PROJECT: self._get_project,
            ToolName.CREATE_PROJECT: self._create_project,
            ToolName.UPDATE_PROJECT: self._update_project,
            ToolName.GET_MEMBERS: self._get_members,
            ToolName.GET_CURRENT_MEMBER: self._get_current_member,
            ToolName.GET_LABELS: self._get_labels,
            ToolName.CREATE_LABEL: self._create_label,
            ToolName.GET_ITERATIONS: self._get_iterations,
            ToolName.GET_ITERATION: self._get_iteration,
            ToolName.CREATE_ITERATION: self._create_iteration,
            ToolName.SEARCH: self._search,
            ToolName.GET_WORKFLOWS: self._get_workflows,
        }

        # configure is the one tool handled outside the table
        expected = set(ToolName) - {ToolName.CONFIGURE}
        if set(self._handlers) != expected:
            drift = sorted(name.value for name in expected ^ set(self._handlers))
            raise RuntimeError(f"Handler table out of sync with tool names: {drift}")
        self.registry.ensure_complete()

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def is_configured(self) -> bool:
        return isinstance(self._state, Configured)

    def list_tools(self) -> list[Tool]:
        """Return the static tool catalog."""
        return self.registry.to_mcp_tools()

    async def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> str:
        """
        Execute a tool call.

        Args:
            name: Tool name as sent by the host
            arguments: Flat argument object

        Returns:
            The text payload for the host

        Raises:
            ToolError: On any failure
        """
        arguments = arguments or {}
        request_id = str(uuid.uuid4())
        tool = self.registry.resolve(name)
        start_time = time.perf_counter()

        bind_context(tool=name, request_id=request_id)
        try:
            text = await self._dispatch(name, tool, arguments)
        except ToolError as e:
            self._audit(name, tool, arguments, request_id, start_time, error=e)
            raise
        else:
            self._audit(name, tool, arguments, request_id, start_time)
            return text
        finally:
            clear_context()

    async def close(self) -> None:
        """Release the live client, if any."""
        await self._reset()

    async def _dispatch(
        self,
        name: str,
        tool: Optional[ToolName],
        arguments: dict[str, Any]
    ) -> str:
        if tool is None:
            raise ToolError.unknown_tool(name)

        if tool is ToolName.CONFIGURE:
            return await self._configure(arguments)

        if not isinstance(self._state, Configured):
            raise ToolError.not_configured()

        handler = self._handlers[tool]
        try:
            return await handler(self._state.client, arguments)
        except ToolError:
            raise
        except Exception as e:
            logger.error("Tool execution failed", error=str(e), exc_info=True)
            raise ToolError.execution_failed(name, e) from e

    def _audit(
        self,
        name: str,
        tool: Optional[ToolName],
        arguments: dict[str, Any],
        request_id: str,
        start_time: float,
        error: Optional[ToolError] = None
    ) -> None:
        entry = self.audit_logger.create_entry(
            tool_name=name,
            tool=self.registry.get(tool) if tool else None,
            parameters=arguments,
            request_id=request_id,
            execution_time_ms=(time.perf_counter() - start_time) * 1000,
            error=error.message if error else None,
            error_code=int(error.code) if error else None,
        )
        self.audit_logger.log(entry)

    async def _reset(self) -> None:
        previous, self._state = self._state, Unconfigured()
        if isinstance(previous, Configured):
            await previous.client.aclose()

    async def _configure(self, arguments: dict[str, Any]) -> str:
        """
        Build a client, verify it against ``GET /member`` and commit it.

        A failed attempt leaves the dispatcher unconfigured, dropping any
        client committed by an earlier call.
        """
        prospective: Optional[ShortcutClient] = None
        try:
            config: ShortcutConfig = ConfigureArguments.model_validate(arguments).to_config(
                default_base_url=self.settings.base_url
            )
            prospective = self._client_factory(config, timeout=self.settings.timeout_seconds)
            member = await prospective.get_current_member()
        except Exception as e:
            if prospective is not None:
                await prospective.aclose()
            await self._reset()
            logger.warning("Shortcut configuration failed", error=str(e))
            raise ToolError.configuration_failed(e) from e

        previous, self._state = self._state, Configured(prospective)
        if isinstance(previous, Configured):
            await previous.client.aclose()

        logger.info(
            "Shortcut API configured",
            base_url=prospective.base_url,
            member_id=member.id
        )
        return "Shortcut API configured successfully!"

    # Stories

    async def _get_stories(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        filters = StoryFilters.model_validate(arguments)
        stories = await client.get_stories(
            project_id=filters.project_id,
            epic_id=filters.epic_id,
            workflow_state_id=filters.workflow_state_id,
            includes_description=filters.includes_description,
        )
        return format_json(stories)

    async def _get_story(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EntityId.model_validate(arguments)
        return format_json(await client.get_story(args.id))

    async def _create_story(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        fields = StoryFields.model_validate(arguments)
        story = await client.create_story(fields.payload())
        return confirm("Story created successfully!", story)

    async def _update_story(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = StoryUpdate.model_validate(arguments)
        story = await client.update_story(args.id, args.payload("id"))
        return confirm("Story updated successfully!", story)

    async def _delete_story(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EntityId.model_validate(arguments)
        await client.delete_story(args.id)
        return f"Story {args.id} deleted successfully!"

    # Epics

    async def _get_epics(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_epics())

    async def _get_epic(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EntityId.model_validate(arguments)
        return format_json(await client.get_epic(args.id))

    async def _create_epic(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        fields = EpicFields.model_validate(arguments)
        return confirm("Epic created successfully!", await client.create_epic(fields.payload()))

    async def _update_epic(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EpicUpdate.model_validate(arguments)
        epic = await client.update_epic(args.id, args.payload("id"))
        return confirm("Epic updated successfully!", epic)

    # Projects

    async def _get_projects(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_projects())

    async def _get_project(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EntityId.model_validate(arguments)
        return format_json(await client.get_project(args.id))

    async def _create_project(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        fields = ProjectFields.model_validate(arguments)
        project = await client.create_project(fields.payload())
        return confirm("Project created successfully!", project)

    async def _update_project(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = ProjectUpdate.model_validate(arguments)
        project = await client.update_project(args.id, args.payload("id"))
        return confirm("Project updated successfully!", project)

    # Members

    async def _get_members(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_members())

    async def _get_current_member(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_current_member())

    # Labels

    async def _get_labels(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_labels())

    async def _create_label(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        fields = LabelFields.model_validate(arguments)
        return confirm("Label created successfully!", await client.create_label(fields.payload()))

    # Iterations

    async def _get_iterations(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_iterations())

    async def _get_iteration(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = EntityId.model_validate(arguments)
        return format_json(await client.get_iteration(args.id))

    async def _create_iteration(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        fields = IterationFields.model_validate(arguments)
        iteration = await client.create_iteration(fields.payload())
        return confirm("Iteration created successfully!", iteration)

    # Search and workflows

    async def _search(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        args = SearchQuery.model_validate(arguments)
        return format_json(await client.search(args.query, args.detail))

    async def _get_workflows(self, client: ShortcutClient, arguments: dict[str, Any]) -> str:
        return format_json(await client.get_workflows())
