from fastapi import APIRouter, status, Depends

from src.common.exceptions import (
    ResourceType,
    invalid_input_response,
    resource_not_found_response,
)
from src.todos.dependencies import get_task_service
from src.todos.schemas import (
    CreateTaskRequest,
    DeleteTaskResponse,
    Task,
    TaskPatch,
)
from src.todos.service import TaskService


router = APIRouter(
    prefix="/todos",
    tags=["Todos"],
)


@router.get("")
def list_tasks(
    task_service: TaskService = Depends(get_task_service),
) -> list[Task]:
    return task_service.list_tasks()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={**invalid_input_response},
)
def create_task(
    task_input: CreateTaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.create_task(task_input.title)


@router.patch(
    "/{task_id}",
    responses={
        **invalid_input_response,
        **resource_not_found_response(ResourceType.TASK),
    },
)
def update_task(
    task_id: str,
    patch: TaskPatch,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.update_task(task_id, patch)


@router.post(
    "/{task_id}/toggle",
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def toggle_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.toggle_task(task_id)


@router.delete(
    "/{task_id}",
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def delete_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service),
) -> DeleteTaskResponse:
    return task_service.delete_task(task_id)
