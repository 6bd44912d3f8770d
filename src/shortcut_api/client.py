"""HTTP client for the Shortcut REST API.

Each method issues exactly one request against the configured base URL
and returns the parsed response. Non-success statuses raise
:class:`ShortcutAPIError`; nothing is retried.
"""

from typing import Any, Optional

import httpx
from pydantic import TypeAdapter

from shared.config import DEFAULT_BASE_URL
from shared.logging import get_logger
from shared.models import (
    Epic,
    Iteration,
    Label,
    Member,
    Project,
    SearchDetail,
    ShortcutConfig,
    Story,
    Workflow,
)

logger = get_logger(__name__)

TOKEN_HEADER = "Shortcut-Token"

_stories = TypeAdapter(list[Story])
_epics = TypeAdapter(list[Epic])
_projects = TypeAdapter(list[Project])
_members = TypeAdapter(list[Member])
_labels = TypeAdapter(list[Label])
_iterations = TypeAdapter(list[Iteration])
_workflows = TypeAdapter(list[Workflow])


class ShortcutAPIError(Exception):
    """The Shortcut API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shortcut API error ({status_code}): {body}")


class ShortcutClient:
    """
    Client for the Shortcut REST API.

    Provides one method per resource and verb:
    - Stories (search, get, create, update, delete)
    - Epics, projects (list, get, create, update)
    - Members (read-only), labels, iterations
    - Search and workflows (read-only)

    The client holds no state beyond its configuration and the
    underlying connection pool.
    """

    def __init__(self, config: ShortcutConfig, timeout: float = 30.0) -> None:
        """
        Initialize the client.

        Args:
            config: API token and optional base URL override
            timeout: Request timeout in seconds
        """
        self.config = config
        self.base_url = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get request headers including authentication."""
        return {
            "Content-Type": "application/json",
            TOKEN_HEADER: self.config.api_token,
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers()
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "ShortcutClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request and fail on any non-success status."""
        client = await self._get_client()
        response = await client.request(method, path, **kwargs)

        logger.debug(
            "Shortcut request",
            method=method,
            path=path,
            status=response.status_code
        )

        if not response.is_success:
            raise ShortcutAPIError(response.status_code, response.text)
        return response

    async def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._request(method, path, **kwargs)
        return response.json()

    # Stories

    async def get_stories(
        self,
        project_id: Optional[int] = None,
        epic_id: Optional[int] = None,
        workflow_state_id: Optional[int] = None,
        includes_description: Optional[bool] = None
    ) -> list[Story]:
        """
        Search stories.

        The endpoint takes the filters as a JSON body; present filters are
        repeated as query parameters as well.
        """
        filters: dict[str, Any] = {
            "project_id": project_id,
            "epic_id": epic_id,
            "includes_description": includes_description,
            "workflow_state_id": workflow_state_id,
        }
        body = {key: value for key, value in filters.items() if value is not None}

        params: dict[str, str] = {}
        if project_id:
            params["project_id"] = str(project_id)
        if epic_id:
            params["epic_id"] = str(epic_id)
        if includes_description:
            params["includes_description"] = "true"
        if workflow_state_id:
            params["workflow_state_id"] = str(workflow_state_id)

        data = await self._json("POST", "/stories/search", params=params, json=body)
        return _stories.validate_python(data)

    async def get_story(self, story_id: int) -> Story:
        data = await self._json("GET", f"/stories/{story_id}")
        return Story.model_validate(data)

    async def create_story(self, fields: dict[str, Any]) -> Story:
        data = await self._json("POST", "/stories", json=fields)
        return Story.model_validate(data)

    async def update_story(self, story_id: int, updates: dict[str, Any]) -> Story:
        data = await self._json("PUT", f"/stories/{story_id}", json=updates)
        return Story.model_validate(data)

    async def delete_story(self, story_id: int) -> None:
        await self._request("DELETE", f"/stories/{story_id}")

    # Epics

    async def get_epics(self) -> list[Epic]:
        return _epics.validate_python(await self._json("GET", "/epics"))

    async def get_epic(self, epic_id: int) -> Epic:
        return Epic.model_validate(await self._json("GET", f"/epics/{epic_id}"))

    async def create_epic(self, fields: dict[str, Any]) -> Epic:
        return Epic.model_validate(await self._json("POST", "/epics", json=fields))

    async def update_epic(self, epic_id: int, updates: dict[str, Any]) -> Epic:
        data = await self._json("PUT", f"/epics/{epic_id}", json=updates)
        return Epic.model_validate(data)

    # Projects

    async def get_projects(self) -> list[Project]:
        return _projects.validate_python(await self._json("GET", "/projects"))

    async def get_project(self, project_id: int) -> Project:
        return Project.model_validate(await self._json("GET", f"/projects/{project_id}"))

    async def create_project(self, fields: dict[str, Any]) -> Project:
        return Project.model_validate(await self._json("POST", "/projects", json=fields))

    async def update_project(self, project_id: int, updates: dict[str, Any]) -> Project:
        data = await self._json("PUT", f"/projects/{project_id}", json=updates)
        return Project.model_validate(data)

    # Members

    async def get_members(self) -> list[Member]:
        return _members.validate_python(await self._json("GET", "/members"))

    async def get_current_member(self) -> Member:
        """Fetch the member the token belongs to."""
        return Member.model_validate(await self._json("GET", "/member"))

    # Labels

    async def get_labels(self) -> list[Label]:
        return _labels.validate_python(await self._json("GET", "/labels"))

    async def create_label(self, fields: dict[str, Any]) -> Label:
        return Label.model_validate(await self._json("POST", "/labels", json=fields))

    # Iterations

    async def get_iterations(self) -> list[Iteration]:
        return _iterations.validate_python(await self._json("GET", "/iterations"))

    async def get_iteration(self, iteration_id: int) -> Iteration:
        data = await self._json("GET", f"/iterations/{iteration_id}")
        return Iteration.model_validate(data)

    async def create_iteration(self, fields: dict[str, Any]) -> Iteration:
        data = await self._json("POST", "/iterations", json=fields)
        return Iteration.model_validate(data)

    # Search and workflows

    async def search(
        self,
        query: str,
        detail: SearchDetail | str = SearchDetail.FULL
    ) -> Any:
        """Search across all Shortcut entities."""
        params = {"query": query, "detail": SearchDetail(detail).value}
        return await self._json("GET", "/search", params=params)

    async def get_workflows(self) -> list[Workflow]:
        return _workflows.validate_python(await self._json("GET", "/workflows"))
