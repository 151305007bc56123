from datetime import datetime, timezone
import json
import logging
from uuid import uuid4
from pydantic import TypeAdapter, ValidationError

from src.common.exceptions import (
    InvalidInputException,
    ResourceNotFoundException,
    ResourceType,
)
from src.todos.schemas import Task, TaskId, TaskPatch, clean_title
from src.todos.store.base import TaskStore
from src.todos.store.decorators import translate_store_errors
from src.todos.store.local.storage import KeyValueStorage

logger = logging.getLogger(__name__)

task_list_adapter = TypeAdapter(list[Task])


def _with_utc_timestamp(task: Task) -> Task:
    # Hand-edited payloads may mix naive and aware times; naive means UTC
    created_at = task.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return task.model_copy(update={"created_at": created_at.astimezone(timezone.utc)})


class LocalTaskStore(TaskStore):
    """Keeps every task in one JSON array stored under a single key.

    Each mutation reads the whole collection, changes it in memory and writes
    the whole collection back. There is no protection against concurrent
    writers: the last write wins.
    """

    def __init__(self, *, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key

    def _read(self) -> list[Task]:
        payload = self.storage.get(self.key)
        if not payload:
            return []

        # A corrupt payload reads as an empty list so the view never blocks.
        # The next write replaces it, which loses the unreadable data.
        try:
            tasks = task_list_adapter.validate_python(json.loads(payload))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                f"Discarding unreadable task collection under '{self.key}': {e}"
            )
            return []

        return [_with_utc_timestamp(task) for task in tasks]

    def _write(self, tasks: list[Task]) -> None:
        payload = task_list_adapter.dump_json(tasks, by_alias=True)
        self.storage.set(self.key, payload.decode("utf-8"))

    def _find(self, tasks: list[Task], task_id: TaskId) -> int:
        for index, task in enumerate(tasks):
            if str(task.id) == str(task_id):
                return index
        raise ResourceNotFoundException(ResourceType.TASK, task_id)

    @translate_store_errors
    def list_tasks(self) -> list[Task]:
        # sorted() is stable and new tasks are stored first, so equal
        # timestamps still come out newest first
        return sorted(self._read(), key=lambda task: task.created_at, reverse=True)

    @translate_store_errors
    def create_task(self, title: str, timestamp: datetime) -> Task:
        try:
            title = clean_title(title)
        except ValueError as e:
            raise InvalidInputException(str(e)) from e

        tasks = self._read()
        task = Task(id=str(uuid4()), title=title, completed=False, created_at=timestamp)
        self._write([task, *tasks])
        return task

    @translate_store_errors
    def update_task(self, task_id: TaskId, patch: TaskPatch) -> Task:
        changes = patch.changes()
        if not changes:
            raise InvalidInputException(
                "At least one of 'title' or 'completed' must be provided"
            )
        if "title" in changes:
            try:
                changes["title"] = clean_title(changes["title"])
            except ValueError as e:
                raise InvalidInputException(str(e)) from e

        tasks = self._read()
        index = self._find(tasks, task_id)
        tasks[index] = tasks[index].model_copy(update=changes)
        self._write(tasks)
        return tasks[index]

    @translate_store_errors
    def toggle_task(self, task_id: TaskId) -> Task:
        tasks = self._read()
        index = self._find(tasks, task_id)
        tasks[index] = tasks[index].model_copy(
            update={"completed": not tasks[index].completed}
        )
        self._write(tasks)
        return tasks[index]

    @translate_store_errors
    def delete_task(self, task_id: TaskId) -> TaskId:
        tasks = self._read()
        index = self._find(tasks, task_id)
        deleted = tasks.pop(index)
        self._write(tasks)
        return deleted.id

    @translate_store_errors
    def healthcheck(self) -> None:
        self.storage.ping()
