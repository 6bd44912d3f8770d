"""Argument models for the tools.

Each model validates what a tool needs and lets any other key through,
so new Shortcut fields can be sent without a server change.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from shared.models import SearchDetail, ShortcutConfig, StoryType


class ToolArguments(BaseModel):
    """Base for tool arguments; unknown keys are kept."""
    model_config = ConfigDict(extra="allow")

    def payload(self, *exclude: str) -> dict[str, Any]:
        """Fields the caller supplied, minus the excluded ones."""
        return self.model_dump(
            mode="json",
            exclude_unset=True,
            exclude=set(exclude)
        )


class ConfigureArguments(BaseModel):
    api_token: str = Field(
        ...,
        min_length=1,
        repr=False,
        validation_alias=AliasChoices("api_token", "apiToken")
    )
    base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("base_url", "baseUrl")
    )

    def to_config(self, default_base_url: Optional[str] = None) -> ShortcutConfig:
        return ShortcutConfig(
            api_token=self.api_token,
            base_url=self.base_url or default_base_url
        )


class EntityId(ToolArguments):
    """Arguments of tools addressing a single record."""
    id: int


class StoryFilters(ToolArguments):
    project_id: Optional[int] = None
    epic_id: Optional[int] = None
    workflow_state_id: Optional[int] = None
    includes_description: Optional[bool] = None


class StoryFields(ToolArguments):
    name: str
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    project_id: Optional[int] = None
    epic_id: Optional[int] = None
    estimate: Optional[int] = None
    workflow_state_id: Optional[int] = None
    owner_ids: Optional[list[str]] = None


class StoryUpdate(EntityId):
    name: Optional[str] = None
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    project_id: Optional[int] = None
    epic_id: Optional[int] = None
    estimate: Optional[int] = None
    workflow_state_id: Optional[int] = None
    owner_ids: Optional[list[str]] = None


class EpicFields(ToolArguments):
    name: str
    description: Optional[str] = None
    state: Optional[str] = None


class EpicUpdate(EntityId):
    name: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None


class ProjectFields(ToolArguments):
    name: str
    team_id: int
    description: Optional[str] = None


class ProjectUpdate(EntityId):
    name: Optional[str] = None
    description: Optional[str] = None


class LabelFields(ToolArguments):
    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class IterationFields(ToolArguments):
    name: str
    start_date: str
    end_date: str
    description: Optional[str] = None


class SearchQuery(ToolArguments):
    query: str
    detail: SearchDetail = SearchDetail.FULL
