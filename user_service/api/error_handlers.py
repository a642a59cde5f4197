"""Error Handlers: map exceptions raised under the RPC surface to error envelopes.

Invariants:
    - UserServiceError -> exc.http_status with exc.to_response(); context.operation
      names the RPC method (stamped by the handler, or derived from the path here)
    - Validation-category errors log at warning, storage and internal ones at error
    - RequestValidationError -> 400 VALIDATION_ERROR with field-level details
    - Any other exception -> 500 INTERNAL_ERROR, no internal details in the body
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from user_service.api.routes.user_rpc import SERVICE_PATH
from user_service.core.errors import ErrorCategory, ErrorSeverity, UserServiceError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorCategory.VALIDATION: logging.WARNING,
    ErrorCategory.DATABASE: logging.ERROR,
    ErrorCategory.INTERNAL: logging.ERROR,
}


def rpc_method(path: str) -> str | None:
    """`/rpc/user_service.UserService/GetUsers` -> `GetUsers`; None off the RPC surface."""
    prefix = SERVICE_PATH + "/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix):] or None


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, _service_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)


async def _service_error(request: Request, exc: UserServiceError) -> JSONResponse:
    if exc.context.operation is None:
        exc.context.operation = rpc_method(request.url.path)
    logger.log(
        _LOG_LEVELS.get(exc.category, logging.ERROR),
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "operation": exc.context.operation,
            "error_code": exc.code,
            "user_id": exc.context.user_id,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Malformed request on {request.url.path}: {len(details)} field error(s)",
        extra={
            "operation": rpc_method(request.url.path),
            "error_code": "VALIDATION_ERROR",
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        }},
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={
            "operation": rpc_method(request.url.path),
            "error_code": "INTERNAL_ERROR",
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        }},
    )
