import logging
from typing import Any
from pydantic import ValidationError

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import InvalidInputException
from src.todos.schemas import (
    DeleteTaskResponse,
    Task,
    TaskId,
    TaskPatch,
    clean_title,
)
from src.todos.store.base import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, task_store: TaskStore):
        self.task_store = task_store

    @staticmethod
    def parse_patch(data: dict[str, Any]) -> TaskPatch:
        """Build a TaskPatch from raw values, raising InvalidInputException."""
        try:
            return TaskPatch.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            message = error["msg"].removeprefix("Value error, ")
            if error["loc"]:
                message = f"{error['loc'][0]}: {message}"
            raise InvalidInputException(message) from e

    def list_tasks(self) -> list[Task]:
        return self.task_store.list_tasks()

    def create_task(self, title: str) -> Task:
        try:
            title = clean_title(title)
        except ValueError as e:
            raise InvalidInputException(str(e)) from e

        task = self.task_store.create_task(
            title=title, timestamp=get_current_datetime()
        )
        logger.info(f"Created task {task.id}")
        return task

    def update_task(self, task_id: TaskId, patch: TaskPatch) -> Task:
        task = self.task_store.update_task(task_id, patch)
        logger.info(f"Updated task {task_id}: {sorted(patch.model_fields_set)}")
        return task

    def toggle_task(self, task_id: TaskId) -> Task:
        task = self.task_store.toggle_task(task_id)
        logger.info(f"Toggled task {task_id} to completed={task.completed}")
        return task

    def delete_task(self, task_id: TaskId) -> DeleteTaskResponse:
        deleted_id = self.task_store.delete_task(task_id)
        logger.info(f"Deleted task {deleted_id}")
        return DeleteTaskResponse(message="Task deleted", id=deleted_id)
