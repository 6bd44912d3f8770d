"""Tests for the Shortcut API client."""

import json

import httpx
import pytest
import respx

from conftest import MEMBER, TOKEN, make_story
from shared.models import ShortcutConfig, Story, dump_record


def make_client(**config):
    from shortcut_api.client import ShortcutClient

    return ShortcutClient(ShortcutConfig(api_token=TOKEN, **config))


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_headers_carry_token_and_content_type(self, shortcut_api):
        """Test that every request is authenticated with the token header."""
        route = shortcut_api.get("/member").respond(200, json=MEMBER)

        async with make_client() as client:
            member = await client.get_current_member()

        request = route.calls.last.request
        assert request.headers["Shortcut-Token"] == TOKEN
        assert request.headers["Content-Type"] == "application/json"
        assert member.id == MEMBER["id"]
        assert member.profile.mention_name == "ada"

    @pytest.mark.asyncio
    async def test_base_url_override(self):
        """Test that a configured base URL replaces the production one."""
        with respx.mock() as router:
            route = router.get("https://shortcut.example.test/api/v3/epics").respond(200, json=[])

            async with make_client(base_url="https://shortcut.example.test/api/v3/") as client:
                epics = await client.get_epics()

        assert route.called
        assert epics == []

    @pytest.mark.asyncio
    async def test_story_search_sends_filters_as_body_and_query(self, shortcut_api):
        """Test that story search filters go in the body and the query string."""
        route = shortcut_api.post("/stories/search").respond(200, json=[make_story()])

        async with make_client() as client:
            stories = await client.get_stories(project_id=12, includes_description=True)

        request = route.calls.last.request
        assert request.url.params["project_id"] == "12"
        assert request.url.params["includes_description"] == "true"
        assert "epic_id" not in request.url.params
        assert json.loads(request.content) == {"project_id": 12, "includes_description": True}
        assert stories[0].name == "Fix login redirect"

    @pytest.mark.asyncio
    async def test_story_search_without_filters(self, shortcut_api):
        """Test that an unfiltered search posts an empty object."""
        route = shortcut_api.post("/stories/search").respond(200, json=[])

        async with make_client() as client:
            await client.get_stories()

        request = route.calls.last.request
        assert request.url.query == b""
        assert json.loads(request.content) == {}

    @pytest.mark.asyncio
    async def test_search_encodes_query_parameters(self, shortcut_api):
        """Test that search sends query and detail as parameters."""
        route = shortcut_api.get("/search").respond(200, json={"stories": {"data": []}})

        async with make_client() as client:
            result = await client.search("login bug", "slim")

        params = route.calls.last.request.url.params
        assert params["query"] == "login bug"
        assert params["detail"] == "slim"
        assert result == {"stories": {"data": []}}

    @pytest.mark.asyncio
    async def test_update_sends_only_updates(self, shortcut_api):
        """Test that an update puts exactly the given fields."""
        route = shortcut_api.put("/epics/9").respond(200, json={"id": 9, "name": "Q3", "state": "done"})

        async with make_client() as client:
            epic = await client.update_epic(9, {"state": "done"})

        assert json.loads(route.calls.last.request.content) == {"state": "done"}
        assert epic.state == "done"

    @pytest.mark.asyncio
    async def test_delete_returns_nothing(self, shortcut_api):
        """Test that delete succeeds on an empty 204 response."""
        route = shortcut_api.delete("/stories/7").respond(204)

        async with make_client() as client:
            result = await client.delete_story(7)

        assert result is None
        assert route.call_count == 1


class TestErrors:
    """Tests for failure handling."""

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self, shortcut_api):
        """Test that an error status carries the code and raw body."""
        from shortcut_api.client import ShortcutAPIError

        shortcut_api.get("/stories/404").respond(404, text='{"message":"Resource not found."}')

        async with make_client() as client:
            with pytest.raises(ShortcutAPIError) as exc_info:
                await client.get_story(404)

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == '{"message":"Resource not found."}'
        assert str(exc_info.value).startswith("Shortcut API error (404):")

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, shortcut_api):
        """Test that a failed request is attempted exactly once."""
        from shortcut_api.client import ShortcutAPIError

        route = shortcut_api.get("/labels").respond(503, text="unavailable")

        async with make_client() as client:
            with pytest.raises(ShortcutAPIError):
                await client.get_labels()

        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, shortcut_api):
        """Test that network failures are not masked."""
        shortcut_api.get("/workflows").mock(side_effect=httpx.ConnectError("connection refused"))

        async with make_client() as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_workflows()


class TestRecords:
    """Tests for record pass-through."""

    def test_unknown_fields_are_kept(self):
        """Test that fields outside the core set survive a round trip."""
        payload = make_story(labels=[{"id": 3, "name": "backend", "entity_type": "label"}])

        story = Story.model_validate(payload)

        assert story.model_extra["app_url"] == payload["app_url"]
        assert story.labels[0].name == "backend"
        assert dump_record(story) == payload

    def test_missing_core_field_is_rejected(self):
        """Test that a record without a name fails validation."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            Story.model_validate({"id": 1})

    def test_config_hides_token(self):
        """Test that the API token never appears in reprs."""
        config = ShortcutConfig(api_token="very-secret")

        assert "very-secret" not in repr(config)
