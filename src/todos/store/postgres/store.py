from datetime import datetime, timezone
from typing import Any
from sqlalchemy import create_engine, delete, not_, text, update
from sqlalchemy.orm import sessionmaker

from src.common.exceptions import (
    InvalidInputException,
    ResourceNotFoundException,
    ResourceType,
)
from src.todos.schemas import Task, TaskId, TaskPatch, clean_title
from src.todos.store.base import TaskStore
from src.todos.store.decorators import translate_store_errors
from src.todos.store.postgres.model import (
    MAX_ROW_ID,
    TITLE_MAX_LENGTH,
    Base,
    TaskModel,
)


RETURNED_COLUMNS = (
    TaskModel.id,
    TaskModel.title,
    TaskModel.completed,
    TaskModel.created_at,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset, Postgres keeps it
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_task(row: Any) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        completed=row.completed,
        created_at=_as_utc(row.created_at),
    )


def _parse_id(task_id: TaskId) -> int:
    # Only plain ASCII digits name a row; int() also accepts
    # " 1", "+1" and "1_0"
    if isinstance(task_id, str) and not (
        task_id.isascii()
        and task_id.isdigit()
        and len(task_id) <= len(str(MAX_ROW_ID))
    ):
        raise ResourceNotFoundException(ResourceType.TASK, task_id)

    row_id = int(task_id)
    # Ids outside the INTEGER column range can never match a row
    if not 0 < row_id <= MAX_ROW_ID:
        raise ResourceNotFoundException(ResourceType.TASK, task_id)
    return row_id


def _check_title(title: str) -> str:
    try:
        title = clean_title(title)
    except ValueError as e:
        raise InvalidInputException(str(e)) from e

    if len(title) > TITLE_MAX_LENGTH:
        raise InvalidInputException(
            f"Title must be at most {TITLE_MAX_LENGTH} characters"
        )
    return title


class PostgresTaskStore(TaskStore):
    def __init__(self, database_url: str):
        self.engine = create_engine(database_url, pool_pre_ping=True)
        self.Session = sessionmaker(bind=self.engine)

    @translate_store_errors
    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    @translate_store_errors
    def list_tasks(self) -> list[Task]:
        with self.Session() as session:
            rows = (
                session.query(TaskModel)
                .order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
                .all()
            )
            return [_to_task(row) for row in rows]

    @translate_store_errors
    def create_task(self, title: str, timestamp: datetime) -> Task:
        new_task = TaskModel(
            title=_check_title(title),
            completed=False,
            created_at=timestamp,
        )

        with self.Session() as session:
            session.add(new_task)
            session.commit()
            return _to_task(new_task)

    @translate_store_errors
    def update_task(self, task_id: TaskId, patch: TaskPatch) -> Task:
        changes = patch.changes()
        if not changes:
            raise InvalidInputException(
                "At least one of 'title' or 'completed' must be provided"
            )
        if "title" in changes:
            changes["title"] = _check_title(changes["title"])

        return self._update_returning(task_id, changes)

    @translate_store_errors
    def toggle_task(self, task_id: TaskId) -> Task:
        return self._update_returning(
            task_id, {"completed": not_(TaskModel.completed)}
        )

    @translate_store_errors
    def delete_task(self, task_id: TaskId) -> TaskId:
        row_id = _parse_id(task_id)
        statement = (
            delete(TaskModel)
            .where(TaskModel.id == row_id)
            .returning(TaskModel.id)
            .execution_options(synchronize_session=False)
        )

        with self.Session() as session:
            deleted_id = session.execute(statement).scalar_one_or_none()
            if deleted_id is None:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)
            session.commit()
            return deleted_id

    @translate_store_errors
    def healthcheck(self) -> None:
        with self.engine.connect() as connection:
            result = connection.execute(text("SELECT 1")).scalar()
            if result != 1:
                raise RuntimeError("Postgres health check failed")

    def _update_returning(self, task_id: TaskId, values: dict[str, Any]) -> Task:
        # A single UPDATE ... RETURNING both applies the change and proves the
        # row exists; an empty result means the id is unknown.
        row_id = _parse_id(task_id)
        statement = (
            update(TaskModel)
            .where(TaskModel.id == row_id)
            .values(**values)
            .returning(*RETURNED_COLUMNS)
            .execution_options(synchronize_session=False)
        )

        with self.Session() as session:
            row = session.execute(statement).first()
            if row is None:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)
            session.commit()
            return _to_task(row)
