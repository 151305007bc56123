from datetime import datetime, tzinfo

from src.client.view_state import ViewState
from src.todos.schemas import Task

EMPTY_MESSAGE = "No tasks. Add the first one."
LOADING_MESSAGE = "Loading..."


def format_date(value: datetime | None, tz: tzinfo | None = None) -> str:
    """Format a creation time as dd.mm.yyyy HH:MM in ``tz`` (local time by default)."""
    if value is None:
        return ""
    return value.astimezone(tz).strftime("%d.%m.%Y %H:%M")


def render_task(task: Task, tz: tzinfo | None = None) -> str:
    marker = "[x]" if task.completed else "[ ]"
    return f"{marker} {task.title}  ({format_date(task.created_at, tz)})"


def render_view(state: ViewState, tz: tzinfo | None = None) -> list[str]:
    if state.loading:
        return [LOADING_MESSAGE]
    if state.error:
        return [f"Error: {state.error}"]
    if not state.tasks:
        return [EMPTY_MESSAGE]
    return [render_task(task, tz) for task in state.tasks]
