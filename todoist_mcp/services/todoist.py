"""Client for the Todoist REST API v2."""

import logging
from urllib.parse import quote

import requests
from pydantic import ValidationError

from todoist_mcp.config import Settings
from todoist_mcp.exceptions import ConfigurationError, RemoteAPIError
from todoist_mcp.http_client import build_session
from todoist_mcp.models.todoist import Project, Task

logger = logging.getLogger(__name__)


def _error_detail(resp: requests.Response) -> str:
    """Pull a human-readable message out of a failed response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = resp.text.strip()
    if text:
        return text[:200]
    return f"Request failed with status code {resp.status_code}"


class TodoistClient:
    def __init__(self, settings: Settings, session: requests.Session | None = None):
        if not settings.todoist_api_token:
            raise ConfigurationError("TODOIST_API_TOKEN environment variable is required")
        self.base_url = settings.todoist_api_base.rstrip("/")
        self.session = session if session is not None else build_session(settings)

    def call(self, method: str, path: str, body: dict | None = None, params: dict | None = None):
        """Issue one API call and return the decoded JSON (None for empty bodies).

        Any failure is raised as RemoteAPIError.
        """
        url = f"{self.base_url}{path}"
        if params:
            # Percent-encode like encodeURIComponent (space as %20); requests' params= would emit "+".
            url += "?" + "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params.items())
        kwargs = {}
        if body is not None:
            kwargs["json"] = body
        logger.debug("Todoist %s %s", method, url)
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise RemoteAPIError(f"Todoist API error: {e}") from e

        if resp.status_code >= 400:
            raise RemoteAPIError(f"Todoist API error: {_error_detail(resp)}", status_code=resp.status_code)
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteAPIError(
                "Todoist API error: invalid JSON in response", status_code=resp.status_code
            ) from e

    # --- Projects ---

    def get_projects(self) -> list[Project]:
        return _parse_list(Project, self.call("GET", "/projects"))

    def create_project(self, name: str) -> Project:
        return _parse(Project, self.call("POST", "/projects", {"name": name}))

    # --- Tasks ---

    def get_tasks(self, project_id: str | None = None, filter: str | None = None) -> list[Task]:
        params = {}
        if project_id:
            params["project_id"] = project_id
        if filter:
            params["filter"] = filter
        return _parse_list(Task, self.call("GET", "/tasks", params=params))

    def create_task(self, payload: dict) -> Task:
        return _parse(Task, self.call("POST", "/tasks", payload))

    def update_task(self, task_id: str, payload: dict) -> Task:
        return _parse(Task, self.call("POST", f"/tasks/{task_id}", payload))

    def close_task(self, task_id: str) -> None:
        self.call("POST", f"/tasks/{task_id}/close")


def _parse(model, data):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RemoteAPIError(f"Todoist API error: unexpected response shape ({e.error_count()} errors)") from e


def _parse_list(model, data) -> list:
    if not isinstance(data, list):
        raise RemoteAPIError("Todoist API error: expected a list in response")
    return [_parse(model, item) for item in data]
