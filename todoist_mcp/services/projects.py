"""Find-or-create lookup of Todoist projects by name."""

import logging
import threading
from contextlib import contextmanager

from todoist_mcp.models.todoist import Project
from todoist_mcp.services.todoist import TodoistClient

logger = logging.getLogger(__name__)


class ProjectResolver:
    """Maps human-readable project names to project ids.

    Resolutions of the same name are serialized inside this process. Two
    processes resolving a new name at once can still both create it; the
    duplicate project is left in place.
    """

    def __init__(self, client: TodoistClient):
        self.client = client
        # casefolded name -> [lock, threads holding or waiting on it]
        self._locks: dict[str, list] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _name_lock(self, name: str):
        """Hold the lock for `name`; the entry is dropped once nobody needs it."""
        key = name.casefold()
        with self._locks_guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def find(self, name: str) -> Project | None:
        """Return the first project whose name matches case-insensitively."""
        wanted = name.casefold()
        for project in self.client.get_projects():
            if project.name.casefold() == wanted:
                return project
        return None

    def resolve(self, name: str) -> str:
        """Return the id of the project called `name`, creating it if missing."""
        with self._name_lock(name):
            project = self.find(name)
            if project is not None:
                return project.id
            logger.info("Project %r not found, creating it", name)
            return self.client.create_project(name).id
