import logging

from src.client.api_client import TodoApiClient, TodoApiError
from src.client.view_state import ViewState
from src.todos.schemas import TaskId

logger = logging.getLogger(__name__)


class TodoController:
    """Drives the task list through the HTTP API.

    Every action makes one call and then reloads the whole list; nothing is
    patched in place and nothing is applied optimistically.
    """

    def __init__(self, api_client: TodoApiClient):
        self.api_client = api_client

    def loading(self, state: ViewState) -> ViewState:
        return ViewState(tasks=state.tasks, loading=True)

    async def load(self) -> ViewState:
        try:
            tasks = await self.api_client.list_tasks()
        except TodoApiError as e:
            logger.error(f"Failed to load tasks: {e}")
            return ViewState(error=f"Failed to load tasks: {e}")
        return ViewState(tasks=tasks)

    async def add(self, state: ViewState, title: str) -> ViewState:
        title = title.strip()
        if not title:
            return state

        try:
            await self.api_client.create_task(title)
        except TodoApiError as e:
            logger.error(f"Failed to add task: {e}")
            return state.with_alert(f"Failed to add task: {e}")
        return await self.load()

    async def toggle(self, state: ViewState, task_id: TaskId) -> ViewState:
        try:
            await self.api_client.toggle_task(task_id)
        except TodoApiError as e:
            logger.error(f"Failed to update task {task_id}: {e}")
            return state.with_alert(f"Failed to update task: {e}")
        return await self.load()

    async def delete(self, state: ViewState, task_id: TaskId) -> ViewState:
        try:
            await self.api_client.delete_task(task_id)
        except TodoApiError as e:
            logger.error(f"Failed to delete task {task_id}: {e}")
            return state.with_alert(f"Failed to delete task: {e}")
        return await self.load()
