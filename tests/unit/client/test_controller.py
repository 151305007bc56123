from datetime import datetime, timezone
from unittest.mock import Mock
import pytest
from pytest_mock import MockerFixture

from src.client.api_client import TodoApiClient, TodoApiError
from src.client.controller import TodoController
from src.client.view_state import ViewState
from src.todos.schemas import Task


@pytest.fixture
def mock_api_client(mocker: MockerFixture) -> Mock:
    # Async methods of TodoApiClient come back as AsyncMock children
    return mocker.Mock(spec=TodoApiClient)


@pytest.fixture
def controller(mock_api_client: Mock) -> TodoController:
    return TodoController(api_client=mock_api_client)


@pytest.fixture
def sample_task() -> Task:
    return Task(
        id=1,
        title="buy milk",
        completed=False,
        created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
    )


async def test_load(
    controller: TodoController, mock_api_client: Mock, sample_task: Task
) -> None:
    mock_api_client.list_tasks.return_value = [sample_task]

    state = await controller.load()

    assert state == ViewState(tasks=[sample_task])


async def test_load_failure_sets_inline_error(
    controller: TodoController, mock_api_client: Mock
) -> None:
    mock_api_client.list_tasks.side_effect = TodoApiError(
        "An unexpected error occurred", status=500
    )

    state = await controller.load()

    assert state.tasks == []
    assert state.loading is False
    assert state.error == "Failed to load tasks: An unexpected error occurred"


def test_loading_keeps_current_tasks(
    controller: TodoController, sample_task: Task
) -> None:
    state = controller.loading(ViewState(tasks=[sample_task], alert="old"))

    assert state == ViewState(tasks=[sample_task], loading=True)


async def test_add_creates_then_reloads(
    controller: TodoController, mock_api_client: Mock, sample_task: Task
) -> None:
    mock_api_client.create_task.return_value = sample_task
    mock_api_client.list_tasks.return_value = [sample_task]

    state = await controller.add(ViewState(), "  buy milk ")

    mock_api_client.create_task.assert_awaited_once_with("buy milk")
    mock_api_client.list_tasks.assert_awaited_once()
    assert state.tasks == [sample_task]


async def test_add_blank_title_is_noop(
    controller: TodoController, mock_api_client: Mock
) -> None:
    current = ViewState()

    state = await controller.add(current, "   ")

    assert state is current
    mock_api_client.create_task.assert_not_called()


async def test_add_failure_sets_alert(
    controller: TodoController, mock_api_client: Mock, sample_task: Task
) -> None:
    mock_api_client.create_task.side_effect = TodoApiError(
        "Field 'title' is required", status=400
    )

    state = await controller.add(ViewState(tasks=[sample_task]), "buy milk")

    assert state.tasks == [sample_task]
    assert state.alert == "Failed to add task: Field 'title' is required"
    mock_api_client.list_tasks.assert_not_called()


async def test_toggle_uses_single_server_call(
    controller: TodoController, mock_api_client: Mock, sample_task: Task
) -> None:
    completed_task = sample_task.model_copy(update={"completed": True})
    mock_api_client.toggle_task.return_value = completed_task
    mock_api_client.list_tasks.return_value = [completed_task]

    state = await controller.toggle(ViewState(tasks=[sample_task]), 1)

    mock_api_client.toggle_task.assert_awaited_once_with(1)
    mock_api_client.update_task.assert_not_called()
    assert state.tasks[0].completed is True


async def test_toggle_failure_sets_alert(
    controller: TodoController, mock_api_client: Mock
) -> None:
    mock_api_client.toggle_task.side_effect = TodoApiError(
        "Task '1' not found", status=404
    )

    state = await controller.toggle(ViewState(), 1)

    assert state.alert == "Failed to update task: Task '1' not found"


async def test_delete_then_reload(
    controller: TodoController, mock_api_client: Mock, sample_task: Task
) -> None:
    mock_api_client.list_tasks.return_value = []

    state = await controller.delete(ViewState(tasks=[sample_task]), 1)

    mock_api_client.delete_task.assert_awaited_once_with(1)
    assert state == ViewState()


async def test_delete_failure_sets_alert(
    controller: TodoController, mock_api_client: Mock
) -> None:
    mock_api_client.delete_task.side_effect = TodoApiError(
        "Could not reach the server: refused"
    )

    state = await controller.delete(ViewState(), 1)

    assert state.alert == "Failed to delete task: Could not reach the server: refused"
