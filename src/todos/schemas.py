from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

TaskId = int | str


def clean_title(value: Any) -> str:
    """Trim a title, rejecting anything that is not a non-empty string."""
    if not isinstance(value, str):
        raise ValueError("Title must be a string")

    title = value.strip()
    if not title:
        raise ValueError("Title must not be empty")

    return title


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: TaskId
    title: str
    completed: bool = False
    created_at: datetime = Field(alias="createdAt")


class CreateTaskRequest(BaseModel):
    title: str

    @field_validator("title")
    def validate_title(cls, value: str):
        return clean_title(value)


class TaskPatch(BaseModel):
    """Partial update of a task.

    A field is part of the patch only when it was explicitly given, so
    ``TaskPatch(completed=True)`` leaves the title untouched. Present fields
    may not be null, and ``completed`` must be a real boolean.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    completed: StrictBool | None = None

    @field_validator("title")
    def validate_title(cls, value: str | None):
        if value is None:
            return value
        return clean_title(value)

    @model_validator(mode="after")
    def validate_fields_present(self):
        if not self.model_fields_set:
            raise ValueError(
                "At least one of 'title' or 'completed' must be provided"
            )

        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"'{field}' must not be null")

        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class DeleteTaskResponse(BaseModel):
    message: str
    id: TaskId
