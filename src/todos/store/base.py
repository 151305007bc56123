from abc import ABC, abstractmethod
from datetime import datetime

from src.todos.schemas import Task, TaskId, TaskPatch


class TaskStore(ABC):
    @abstractmethod
    def list_tasks(self) -> list[Task]:
        """Return every task, newest first."""
        pass

    @abstractmethod
    def create_task(self, title: str, timestamp: datetime) -> Task:
        pass

    @abstractmethod
    def update_task(self, task_id: TaskId, patch: TaskPatch) -> Task:
        pass

    @abstractmethod
    def toggle_task(self, task_id: TaskId) -> Task:
        """Invert the completed flag in a single store operation."""
        pass

    @abstractmethod
    def delete_task(self, task_id: TaskId) -> TaskId:
        pass

    @abstractmethod
    def healthcheck(self) -> None:
        """Raise if the underlying medium cannot be reached."""
        pass
