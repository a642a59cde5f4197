"""Application lifespan: collaborators built from settings, supervisor started and stopped."""

import logging

import pytest

from user_service.config import get_settings
from user_service.core.domain_types import ConnectionState
from user_service.main import app, lifespan
from user_service.schemas.user import CreateUserRequest, GetUserByIDRequest, UserInfo
from user_service.services.user_handler import UserRequestHandler


@pytest.fixture
def lifespan_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    monkeypatch.setenv("CREATE_SCHEMA", "true")
    monkeypatch.setenv("CONN_CHECK", "true")
    monkeypatch.setenv("RECONN_TIME", "60")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_FORMAT", "text")
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)


async def test_lifespan_wires_and_tears_down(lifespan_env):
    async with lifespan(app):
        handler = app.state.user_handler
        supervisor = app.state.connection_supervisor
        assert isinstance(handler, UserRequestHandler)
        assert supervisor.running
        assert await app.state.db_manager.health_check()

        created = await handler.create_user(CreateUserRequest(
            user=UserInfo(nickname="alice", email="a@x.com", first_name="A", last_name="L"),
            password="Str0ng!Pwd",
        ))
        got = await handler.get_user_by_id(GetUserByIDRequest(oid=created.oid))
        assert got.user.nickname == "alice"

    assert not supervisor.running
    assert supervisor.state is ConnectionState.STOPPED


async def test_lifespan_leaves_supervisor_idle_when_disabled(lifespan_env, monkeypatch):
    monkeypatch.setenv("CONN_CHECK", "false")

    async with lifespan(app):
        assert not app.state.connection_supervisor.running
        assert app.state.connection_supervisor.is_healthy
