import pytest
from aiohttp import ClientConnectionError, ClientResponse, ContentTypeError
from pytest_mock import MockerFixture

from src.client.api_client import TodoApiClient, TodoApiError
from src.todos.schemas import DeleteTaskResponse

TASK_JSON = {
    "id": 1,
    "title": "buy milk",
    "completed": False,
    "createdAt": "2024-01-01T12:00:00Z",
}


def mock_response(mocker: MockerFixture, status: int, data: object = None):
    response = mocker.Mock(spec=ClientResponse)
    response.status = status
    response.json.return_value = data
    return response


async def test_list_tasks(api_client: TodoApiClient, mocker: MockerFixture) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.return_value = mock_response(
        mocker, 200, [TASK_JSON]
    )

    tasks = await api_client.list_tasks()

    assert len(tasks) == 1
    assert tasks[0].id == 1
    assert tasks[0].title == "buy milk"
    mock_request.assert_called_once_with(
        "GET", "http://localhost:3000/todos", json=None
    )


async def test_create_task(api_client: TodoApiClient, mocker: MockerFixture) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.return_value = mock_response(
        mocker, 201, TASK_JSON
    )

    task = await api_client.create_task("buy milk")

    assert task.title == "buy milk"
    mock_request.assert_called_once_with(
        "POST", "http://localhost:3000/todos", json={"title": "buy milk"}
    )


async def test_update_task_sends_only_given_fields(
    api_client: TodoApiClient, mocker: MockerFixture
) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.return_value = mock_response(
        mocker, 200, {**TASK_JSON, "completed": True}
    )

    task = await api_client.update_task(1, completed=True)

    assert task.completed is True
    mock_request.assert_called_once_with(
        "PATCH", "http://localhost:3000/todos/1", json={"completed": True}
    )


async def test_toggle_and_delete(
    api_client: TodoApiClient, mocker: MockerFixture
) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.side_effect = [
        mock_response(mocker, 200, {**TASK_JSON, "completed": True}),
        mock_response(mocker, 200, {"message": "Task deleted", "id": 1}),
    ]

    toggled = await api_client.toggle_task(1)
    deleted = await api_client.delete_task(1)

    assert toggled.completed is True
    assert deleted == DeleteTaskResponse(message="Task deleted", id=1)
    assert mock_request.call_args_list[0].args == (
        "POST",
        "http://localhost:3000/todos/1/toggle",
    )
    assert mock_request.call_args_list[1].args == (
        "DELETE",
        "http://localhost:3000/todos/1",
    )


async def test_error_uses_server_message(
    api_client: TodoApiClient, mocker: MockerFixture
) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.return_value = mock_response(
        mocker, 404, {"error": "Task '9' not found"}
    )

    with pytest.raises(TodoApiError, match="Task '9' not found") as exc_info:
        await api_client.delete_task(9)

    assert exc_info.value.status == 404


async def test_error_without_json_body(
    api_client: TodoApiClient, mocker: MockerFixture
) -> None:
    response = mock_response(mocker, 502)
    response.json.side_effect = ContentTypeError(mocker.Mock(), ())
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.return_value = response

    with pytest.raises(TodoApiError, match="HTTP 502"):
        await api_client.list_tasks()


async def test_network_error_is_not_retried(
    api_client: TodoApiClient, mocker: MockerFixture
) -> None:
    mock_request = mocker.patch.object(api_client.session, "request")
    mock_request.return_value.__aenter__.side_effect = ClientConnectionError(
        "connection refused"
    )

    with pytest.raises(TodoApiError, match="Could not reach the server"):
        await api_client.list_tasks()

    assert mock_request.call_count == 1
