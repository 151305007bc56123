import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.common.exceptions import (
    InvalidInputException,
    ResourceNotFoundException,
    StoreUnavailableException,
    internal_error_response,
    invalid_input_handler,
    resource_not_found_handler,
    store_unavailable_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from src.common.opentelemetry import setup_opentelemetry
from src.common.redis import create_redis_client
from src.config import get_settings
from src.healthcheck.router import router as health_router
from src.todos.router import router as todos_router
from src.todos.store.backend import get_task_store_backend
from src.todos.store.postgres.store import PostgresTaskStore

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    redis_client = (
        create_redis_client(settings.REDIS_URL)
        if settings.TASK_STORE_BACKEND == "redis"
        else None
    )
    task_store = get_task_store_backend(redis_client, settings)

    # The server still starts when the store is down; requests then fail with 500
    try:
        if isinstance(task_store, PostgresTaskStore):
            task_store.create_schema()
        task_store.healthcheck()
        logger.info(f"Connected to the {settings.TASK_STORE_BACKEND} task store")
    except StoreUnavailableException:
        logger.error(
            f"Could not reach the {settings.TASK_STORE_BACKEND} task store, check the connection settings"
        )

    app.state.task_store = task_store
    yield
    if isinstance(task_store, PostgresTaskStore):
        task_store.engine.dispose()
    if redis_client is not None:
        redis_client.close()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={**internal_error_response},
    version=settings.TODO_API_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings, app)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(InvalidInputException)(invalid_input_handler)
app.exception_handler(StoreUnavailableException)(store_unavailable_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(todos_router)
