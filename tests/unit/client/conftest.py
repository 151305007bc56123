from typing import AsyncGenerator

import pytest

from src.client.api_client import TodoApiClient


@pytest.fixture
async def api_client() -> AsyncGenerator[TodoApiClient, None]:
    async with TodoApiClient(base_url="http://localhost:3000/") as client:
        yield client
