from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Envelope returned by every tool, identical on both transports."""

    content: list[TextContent]
    is_error: bool | None = Field(default=None, alias="isError")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Tool arguments ---
# Unknown keys are ignored so that clients sending extra hints still work.


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class CreateTaskArgs(ToolArguments):
    content: str = Field(min_length=1)
    description: str | None = None
    project_name: str | None = None
    due_string: str | None = None
    priority: int | None = None
    labels: list[str] | None = None


class ListTasksArgs(ToolArguments):
    project_name: str | None = None
    filter: str | None = None


class ListProjectsArgs(ToolArguments):
    pass


class CompleteTaskArgs(ToolArguments):
    task_id: str = Field(min_length=1)


class UpdateTaskArgs(ToolArguments):
    task_id: str = Field(min_length=1)
    content: str | None = None
    description: str | None = None
    due_string: str | None = None
    priority: int | None = None
