"""FastAPI Dependencies: hand out the lifespan-built collaborators stored on app.state.

Invariants:
    - Nothing here constructs a collaborator; the lifespan owns construction
    - Tests swap collaborators through app.dependency_overrides
"""

from fastapi import Request

from user_service.infrastructure.connection_supervisor import ConnectionSupervisor
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.services.user_handler import UserRequestHandler


def get_user_handler(request: Request) -> UserRequestHandler:
    """Get the request handler instance."""
    return request.app.state.user_handler


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    """Get the database session manager, None before startup."""
    return getattr(request.app.state, "db_manager", None)


def get_connection_supervisor(request: Request) -> ConnectionSupervisor | None:
    """Get the connection supervisor, None before startup."""
    return getattr(request.app.state, "connection_supervisor", None)
