"""Shared HTTP session for Todoist API calls."""

import requests

from todoist_mcp.config import Settings


def build_session(settings: Settings) -> requests.Session:
    """Return a requests.Session that sends the bearer token on every call.

    No retry adapter is mounted: a failed call surfaces immediately.
    """
    session = requests.Session()
    session.headers.update({
        "Authorization": f"Bearer {settings.todoist_api_token}",
        "Content-Type": "application/json",
    })
    return session
