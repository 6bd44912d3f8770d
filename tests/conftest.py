"""Shared fixtures: a mocked Shortcut API and dispatchers in both states."""

import pytest
import pytest_asyncio
import respx

BASE_URL = "https://api.app.shortcut.com/api/v3"
TOKEN = "test-token"

MEMBER = {
    "id": "5f0c9a4e-0b6d-4c2f-9d7a-3c1e2b8f6a10",
    "role": "admin",
    "disabled": False,
    "profile": {
        "name": "Ada Lovelace",
        "mention_name": "ada",
        "email_address": "ada@example.com",
    },
}


def make_story(story_id: int = 123, **fields):
    story = {
        "id": story_id,
        "name": "Fix login redirect",
        "story_type": "bug",
        "workflow_state_id": 500000011,
        "app_url": f"https://app.shortcut.com/acme/story/{story_id}",
    }
    story.update(fields)
    return story


@pytest.fixture
def shortcut_api():
    """Mock of the Shortcut API; any unmocked request fails the test."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def dispatcher():
    """An unconfigured dispatcher with auditing switched off."""
    from shortcut_mcp.audit import AuditLogger
    from shortcut_mcp.dispatcher import ToolDispatcher

    return ToolDispatcher(audit_logger=AuditLogger(enabled=False))


@pytest_asyncio.fixture
async def configured(dispatcher, shortcut_api):
    """A dispatcher that has passed the identity probe."""
    shortcut_api.get("/member").respond(200, json=MEMBER)
    await dispatcher.call("configure", {"api_token": TOKEN})
    yield dispatcher
    await dispatcher.close()
