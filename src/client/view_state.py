from dataclasses import dataclass, field, replace

from src.todos.schemas import Task


@dataclass(frozen=True)
class ViewState:
    """What the task list view shows after a controller action.

    ``error`` is rendered inline in place of the list. ``alert`` interrupts
    the user after a failed add/toggle/delete.
    """

    tasks: list[Task] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    alert: str | None = None

    def with_alert(self, alert: str) -> "ViewState":
        return replace(self, alert=alert)
