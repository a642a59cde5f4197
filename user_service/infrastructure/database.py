"""Database Session Manager: async engine owner with automatic rollback, probes, and reopen.

Invariants:
    - Exactly one manager per process, constructed in the app lifespan and injected
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions and driver-level OSErrors (refused, unresolvable,
      timed out) mapped to StorageFailureError (core/errors.py)
    - reopen() swaps engine and session factory together; in-flight sessions keep the old pool

Design Decisions:
    - No module-level singleton: store, supervisor and readiness probe receive the
      same instance by reference
    - expire_on_commit=False: prevents lazy-load issues in async context
    - reopen() probes the fresh engine: create_async_engine connects lazily, so a
      reopen that never touches the server would always "succeed"
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from user_service.core.errors import StorageFailureError
from user_service.db.base import Base
import user_service.models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, database_url: str, **engine_kwargs: Any):
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.database_url = database_url
        self._engine_kwargs = engine_kwargs
        self.engine: AsyncEngine
        self._session_factory: async_sessionmaker[AsyncSession]
        self._build()

    def _build(self) -> None:
        self.engine = create_async_engine(self.database_url, **self._engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StorageFailureError("Integrity constraint violated", "commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StorageFailureError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StorageFailureError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageFailureError("Database operation failed", "unknown") from e
        except OSError as e:
            await session.rollback()
            logger.error(f"DB connection error: {e!r}")
            raise StorageFailureError("Connection or operational error", "connect") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (liveness loop and readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine's pool; raises StorageFailureError if disposal fails."""
        try:
            await self.engine.dispose()
        except Exception as e:
            raise StorageFailureError(str(e), "disconnect") from e

    async def reopen(self) -> None:
        """Rebuild the engine with the same URL and options, then probe it."""
        try:
            self._build()
        except Exception as e:
            raise StorageFailureError(str(e), "connect") from e
        if not await self.health_check():
            raise StorageFailureError("fresh connection unreachable", "connect")

    async def create_schema(self) -> None:
        """Create missing tables (development and test bootstrap only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
