from src.todos.schemas import Task, TaskId
from src.todos.service import TaskService


class OfflineTodoController:
    """Works against a local task store directly, without a server.

    Calls are synchronous, so there is no loading or error state to track;
    failures propagate to the caller.
    """

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    def load(self) -> list[Task]:
        return self.task_service.list_tasks()

    def add(self, title: str) -> list[Task]:
        if title.strip():
            self.task_service.create_task(title)
        return self.load()

    def toggle(self, task_id: TaskId) -> list[Task]:
        self.task_service.toggle_task(task_id)
        return self.load()

    def rename(self, task_id: TaskId, title: str) -> list[Task]:
        patch = self.task_service.parse_patch({"title": title})
        self.task_service.update_task(task_id, patch)
        return self.load()

    def delete(self, task_id: TaskId) -> list[Task]:
        self.task_service.delete_task(task_id)
        return self.load()
