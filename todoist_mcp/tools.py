"""The five Todoist tools: argument models, handlers and advertised schemas."""

import logging
from dataclasses import dataclass
from typing import Callable

from todoist_mcp.models.todoist import Task
from todoist_mcp.models.tools import (
    CompleteTaskArgs,
    CreateTaskArgs,
    ListProjectsArgs,
    ListTasksArgs,
    ToolArguments,
    ToolResult,
    UpdateTaskArgs,
)
from todoist_mcp.services.projects import ProjectResolver
from todoist_mcp.services.todoist import TodoistClient

logger = logging.getLogger(__name__)


def _failure(tool: str, action: str, e: Exception) -> ToolResult:
    logger.warning("Tool %s failed: %s", tool, e)
    return ToolResult.error(f"Error {action}: {e}")


def _format_task(task: Task) -> str:
    due = f" (Due: {task.due.string})" if task.due and task.due.string else ""
    return f"- {task.content}{due} [ID: {task.id}]"


# --- Handlers ---


def create_task(client: TodoistClient, resolver: ProjectResolver, args: CreateTaskArgs) -> ToolResult:
    try:
        payload = args.model_dump(
            include={"content", "description", "due_string", "priority", "labels"},
            exclude_none=True,
        )
        if args.project_name:
            payload["project_id"] = resolver.resolve(args.project_name)
        task = client.create_task(payload)
        return ToolResult.text(f'Task created successfully: "{task.content}" (ID: {task.id})')
    except Exception as e:
        return _failure("create_task", "creating task", e)


def list_tasks(client: TodoistClient, resolver: ProjectResolver, args: ListTasksArgs) -> ToolResult:
    try:
        project_id = None
        if args.project_name:
            # Listing never creates projects; an unknown name means no project filter.
            project = resolver.find(args.project_name)
            if project is not None:
                project_id = project.id
        tasks = client.get_tasks(project_id=project_id, filter=args.filter)
        lines = "\n".join(_format_task(t) for t in tasks)
        return ToolResult.text(f"Found {len(tasks)} task(s):\n\n{lines}")
    except Exception as e:
        return _failure("list_tasks", "listing tasks", e)


def list_projects(client: TodoistClient, resolver: ProjectResolver, args: ListProjectsArgs) -> ToolResult:
    try:
        projects = client.get_projects()
        lines = "\n".join(f"- {p.name} [ID: {p.id}]" for p in projects)
        return ToolResult.text(f"Your Todoist projects:\n\n{lines}")
    except Exception as e:
        return _failure("list_projects", "listing projects", e)


def complete_task(client: TodoistClient, resolver: ProjectResolver, args: CompleteTaskArgs) -> ToolResult:
    try:
        client.close_task(args.task_id)
        return ToolResult.text(f"Task {args.task_id} marked as completed!")
    except Exception as e:
        return _failure("complete_task", "completing task", e)


def update_task(client: TodoistClient, resolver: ProjectResolver, args: UpdateTaskArgs) -> ToolResult:
    try:
        payload = args.model_dump(
            include={"content", "description", "due_string", "priority"},
            exclude_none=True,
        )
        task = client.update_task(args.task_id, payload)
        return ToolResult.text(f'Task updated successfully: "{task.content}"')
    except Exception as e:
        return _failure("update_task", "updating task", e)


# --- Catalog ---


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict
    arguments: type[ToolArguments]
    handler: Callable[[TodoistClient, ProjectResolver, ToolArguments], ToolResult]

    def describe(self) -> dict:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


TOOLS: dict[str, ToolSpec] = {
    tool.name: tool
    for tool in (
        ToolSpec(
            name="create_task",
            description="Create a new task in Todoist",
            input_schema={
                "type": "object",
                "properties": {
                    "content": {"type": "string", "description": "The task content/title"},
                    "description": {"type": "string", "description": "Optional task description"},
                    "project_name": {
                        "type": "string",
                        "description": "Optional project name (will find or create)",
                    },
                    "due_string": {
                        "type": "string",
                        "description": 'Due date in natural language (e.g., "tomorrow", "next Friday")',
                    },
                    "priority": {"type": "number", "description": "Priority level (1-4, where 4 is urgent)"},
                    "labels": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Array of label names",
                    },
                },
                "required": ["content"],
            },
            arguments=CreateTaskArgs,
            handler=create_task,
        ),
        ToolSpec(
            name="list_tasks",
            description="List tasks from Todoist",
            input_schema={
                "type": "object",
                "properties": {
                    "project_name": {"type": "string", "description": "Optional project name to filter by"},
                    "filter": {
                        "type": "string",
                        "description": 'Todoist filter query (e.g., "today", "overdue")',
                    },
                },
            },
            arguments=ListTasksArgs,
            handler=list_tasks,
        ),
        ToolSpec(
            name="list_projects",
            description="List all Todoist projects",
            input_schema={"type": "object", "properties": {}},
            arguments=ListProjectsArgs,
            handler=list_projects,
        ),
        ToolSpec(
            name="complete_task",
            description="Mark a task as completed",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "The task ID to complete"},
                },
                "required": ["task_id"],
            },
            arguments=CompleteTaskArgs,
            handler=complete_task,
        ),
        ToolSpec(
            name="update_task",
            description="Update an existing task",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "The task ID to update"},
                    "content": {"type": "string", "description": "New task content"},
                    "description": {"type": "string", "description": "New task description"},
                    "due_string": {"type": "string", "description": "New due date in natural language"},
                    "priority": {"type": "number", "description": "New priority level (1-4)"},
                },
                "required": ["task_id"],
            },
            arguments=UpdateTaskArgs,
            handler=update_task,
        ),
    )
}
