from pathlib import Path
from typing import Generator
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.main import app as main_app
from src.todos.dependencies import get_task_store
from src.todos.store.base import TaskStore
from src.todos.store.postgres.store import PostgresTaskStore


@pytest.fixture
def test_database_url(tmp_path: Path) -> str:
    db_path: Path = tmp_path / "test_todos.db"
    return f"sqlite:///{db_path}"


@pytest.fixture
def postgres_task_store(test_database_url: str) -> Generator[PostgresTaskStore, None, None]:
    store = PostgresTaskStore(database_url=test_database_url)
    store.create_schema()
    yield store
    store.engine.dispose()


@pytest.fixture
def test_app(postgres_task_store: TaskStore) -> Generator[FastAPI, None, None]:
    main_app.dependency_overrides[get_task_store] = lambda: postgres_task_store
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app, raise_server_exceptions=False)
