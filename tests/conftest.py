"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the users table created
    - bcrypt runs at the minimum cost factor so hashing stays fast
    - No test starts the connection supervisor unless it asks for one

Design Decisions:
    - SQLite in-memory through aiosqlite: fast, no external dependency; PostgreSQL-specific
      behaviour is not exercised here
    - StaticPool: every session shares the one in-memory connection
"""

import os

import pytest
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("CONN_CHECK", "false")

from user_service.infrastructure.database import DatabaseSessionManager  # noqa: E402
from user_service.infrastructure.user_store import UserStore  # noqa: E402
from user_service.services.user_handler import UserRequestHandler  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(TEST_DATABASE_URL, poolclass=StaticPool)
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
def user_store(db_manager):
    return UserStore(db_manager)


@pytest.fixture
def user_handler(user_store):
    return UserRequestHandler(user_store, bcrypt_rounds=TEST_BCRYPT_ROUNDS)
