"""API test fixtures: FastAPI client wired to the in-memory store.

Invariants:
    - Lifespan never runs under ASGITransport; collaborators come from dependency_overrides
    - `supervisor` is a real, never-started ConnectionSupervisor (state HEALTHY)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.api.deps import (
    get_connection_supervisor, get_db_manager, get_user_handler,
)
from user_service.config import ConnectionConfig
from user_service.infrastructure.connection_supervisor import ConnectionSupervisor
from user_service.main import app
from user_service.services.user_handler import UserRequestHandler


@pytest.fixture
def supervisor(db_manager):
    config = ConnectionConfig(url="sqlite+aiosqlite:///:memory:")
    return ConnectionSupervisor(db_manager, config)


@pytest.fixture
def wired_handler(user_store, supervisor):
    return UserRequestHandler(user_store, supervisor, bcrypt_rounds=4)


@pytest.fixture
async def client(db_manager, supervisor, wired_handler):
    app.dependency_overrides[get_user_handler] = lambda: wired_handler
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    app.dependency_overrides[get_connection_supervisor] = lambda: supervisor

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
