import logging
from types import TracebackType
from typing import Any, Type
from aiohttp import ClientError, ClientSession, ContentTypeError

from src.todos.schemas import DeleteTaskResponse, Task, TaskId

logger = logging.getLogger(__name__)


class TodoApiError(Exception):
    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class TodoApiClient:
    """Talks to the todo HTTP API. Failed calls are not retried."""

    def __init__(self, *, base_url: str, session: ClientSession | None = None):
        self.base_url = base_url.rstrip("/")
        self.session: ClientSession = session or ClientSession(
            headers={"Content-Type": "application/json"}
        )

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        if self.session:
            await self.session.close()

    async def request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self.session.request(method, url, json=json) as response:
                if response.status >= 400:
                    raise TodoApiError(
                        await self._error_message(response), status=response.status
                    )
                return await response.json()
        except TodoApiError:
            raise
        except ClientError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TodoApiError(f"Could not reach the server: {e}") from e

    @staticmethod
    async def _error_message(response: Any) -> str:
        try:
            data = await response.json()
        except (ContentTypeError, ValueError):
            data = None

        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"HTTP {response.status}"

    async def list_tasks(self) -> list[Task]:
        data = await self.request("GET", "/todos")
        return [Task.model_validate(item) for item in data]

    async def create_task(self, title: str) -> Task:
        data = await self.request("POST", "/todos", json={"title": title})
        return Task.model_validate(data)

    async def update_task(
        self,
        task_id: TaskId,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        body: dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed

        data = await self.request("PATCH", f"/todos/{task_id}", json=body)
        return Task.model_validate(data)

    async def toggle_task(self, task_id: TaskId) -> Task:
        data = await self.request("POST", f"/todos/{task_id}/toggle")
        return Task.model_validate(data)

    async def delete_task(self, task_id: TaskId) -> DeleteTaskResponse:
        data = await self.request("DELETE", f"/todos/{task_id}")
        return DeleteTaskResponse.model_validate(data)
