"""User Service API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError -> structured JSON responses
    - Database manager, store, supervisor and handler built once in the lifespan
      and published on app.state; nothing is constructed at import time
    - Supervisor stopped before the engine is disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Supervisor always constructed, only started when CONN_CHECK is on: the
      handler reads the same health signal either way
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, user_rpc
from user_service.config import get_settings
from user_service.infrastructure.connection_supervisor import ConnectionSupervisor
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.infrastructure.observability import setup_logging
from user_service.infrastructure.user_store import UserStore
from user_service.services.user_handler import UserRequestHandler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    conn_config = settings.connection_config()

    db_manager = DatabaseSessionManager(
        conn_config.url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.create_schema:
        await db_manager.create_schema()

    supervisor = ConnectionSupervisor(db_manager, conn_config)
    if conn_config.check_enabled:
        supervisor.start()

    app.state.db_manager = db_manager
    app.state.connection_supervisor = supervisor
    app.state.user_handler = UserRequestHandler(
        UserStore(db_manager), supervisor, bcrypt_rounds=settings.bcrypt_rounds,
    )
    logger.info("User service started")
    yield
    logger.info("User service shutting down")
    await supervisor.stop()
    await db_manager.close()


app = FastAPI(title="User Service", version="1.0.0", lifespan=lifespan)

app.include_router(health.router)
app.include_router(user_rpc.router)

register_error_handlers(app)


def serve() -> None:
    """Console entry point: run the API under uvicorn on HOST:PORT."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
