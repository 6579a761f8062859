import json
from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
import requests

from todoist_mcp.config import Settings
from todoist_mcp.services.projects import ProjectResolver
from todoist_mcp.services.todoist import TodoistClient

API_BASE = "https://api.todoist.com/rest/v2"


# --- Canned API responses ---

TODOIST_PROJECTS = [
    {"id": "2203306141", "name": "Inbox", "color": "grey", "is_inbox_project": True},
    {"id": "2203306142", "name": "work", "color": "blue"},
]

TODOIST_NEW_PROJECT = {"id": "2203306199", "name": "Garden", "color": "charcoal"}

TODOIST_TASK = {
    "id": "7025",
    "content": "Buy milk",
    "description": "",
    "project_id": "2203306141",
    "priority": 1,
    "labels": [],
    "due": None,
    "url": "https://todoist.com/showTask?id=7025",
}

TODOIST_TASK_DUE = {
    **TODOIST_TASK,
    "id": "7026",
    "content": "Pay rent",
    "due": {"string": "every 1st", "date": "2025-02-01", "is_recurring": True},
}


def make_response(status_code: int = 200, json_data=None, text: str | None = None) -> requests.Response:
    """Build a real requests.Response carrying the given body."""
    resp = requests.Response()
    resp.status_code = status_code
    if json_data is not None:
        resp._content = json.dumps(json_data).encode()
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode()
    resp.encoding = "utf-8"
    return resp


class FakeTodoist:
    """Routes session.request calls by (method, path) to canned responses."""

    def __init__(self):
        self.routes: dict[tuple[str, str], requests.Response | Exception] = {}
        self.session = MagicMock(spec=requests.Session)
        self.session.request.side_effect = self._dispatch

    def add(self, method: str, path: str, status_code: int = 200, json_data=None, text=None) -> None:
        self.routes[(method, path)] = make_response(status_code, json_data, text)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def _dispatch(self, method, url, **kwargs):
        path = urlsplit(url).path.removeprefix("/rest/v2")
        route = self.routes.get((method, path))
        if route is None:
            return make_response(404, text="Not found")
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def calls(self) -> list[tuple[str, str, dict | None]]:
        """(method, url, json body) for every request issued, in order."""
        return [(c.args[0], c.args[1], c.kwargs.get("json")) for c in self.session.request.call_args_list]

    def calls_to(self, method: str, path: str) -> list[tuple[str, str, dict | None]]:
        return [c for c in self.calls if c[0] == method and urlsplit(c[1]).path == f"/rest/v2{path}"]


@pytest.fixture
def settings():
    return Settings(todoist_api_token="test-token", _env_file=None)


@pytest.fixture
def todoist():
    return FakeTodoist()


@pytest.fixture
def client(settings, todoist):
    return TodoistClient(settings, session=todoist.session)


@pytest.fixture
def resolver(client):
    return ProjectResolver(client)
