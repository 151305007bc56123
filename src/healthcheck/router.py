import logging
from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.config import Settings, get_settings
from src.todos.dependencies import get_task_store
from src.todos.store.base import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/health",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    description=(
        "Reports whether the server and its task store are up. Answers 200 "
        "when the store responds and 503 when it does not, rather than an "
        "unconditional 200."
    ),
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "message": "Server is running",
                        "store": {"backend": "postgres", "status": "ok"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "status": "error",
                        "message": "Task store is unavailable",
                        "store": {"backend": "postgres", "status": "error"},
                    }
                }
            },
        },
    },
)
def healthcheck(
    settings: Settings = Depends(get_settings),
    task_store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    health_status: dict[str, Any] = {
        "status": "ok",
        "message": "Server is running",
        "store": {"backend": settings.TASK_STORE_BACKEND, "status": "ok"},
    }

    try:
        task_store.healthcheck()
    except Exception as e:
        # Only the server log gets the underlying error
        logger.error(f"Task store health check failed: {e!r}")
        health_status.update(
            {"status": "error", "message": "Task store is unavailable"}
        )
        health_status["store"]["status"] = "error"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
