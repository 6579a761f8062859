from pydantic import BaseModel, ConfigDict


class Due(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    string: str | None = None
    date: str | None = None
    datetime: str | None = None
    timezone: str | None = None
    is_recurring: bool = False


class Task(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    content: str
    description: str | None = None
    project_id: str | None = None
    section_id: str | None = None
    parent_id: str | None = None
    due: Due | None = None
    priority: int = 1
    labels: list[str] = []
    url: str | None = None


class Project(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    color: str | None = None
    is_favorite: bool = False
    is_inbox_project: bool = False
    url: str | None = None
