from src.config import Settings
from src.common.redis import RedisClient
from src.todos.store.base import TaskStore
from src.todos.store.local.store import LocalTaskStore
from src.todos.store.postgres.store import PostgresTaskStore


def get_task_store_backend(
    redis_client: RedisClient | None,
    settings: Settings,
) -> TaskStore:
    if settings.TASK_STORE_BACKEND == "postgres":
        return PostgresTaskStore(
            database_url=settings.POSTGRES_URL,
        )
    elif settings.TASK_STORE_BACKEND == "redis":
        if redis_client is None:
            raise ValueError("The redis task store backend requires a Redis client")
        return LocalTaskStore(
            storage=redis_client,
            key=settings.TASK_STORE_NAMESPACE,
        )
    else:
        raise ValueError(
            f"Unsupported task store backend: {settings.TASK_STORE_BACKEND}"
        )
