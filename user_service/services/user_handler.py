"""User Request Handler: translates RPC shapes into store calls and back.

Invariants:
    - Weak passwords are rejected before storage is touched
    - Creation always mints a fresh uuid4; a caller-supplied oid is ignored
    - Only the new identifier is returned from creation, never the hash
    - Absent records leave as EMPTY_SUMMARY (nil oid, empty strings)
    - Every failure is logged at warning level, then re-raised unchanged
    - Storage-bound calls are refused with StoreUnavailableError while the
      connection supervisor reports unhealthy

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would stall the loop
    - Update on a missing identifier still reports is_ok=True; logged at info
"""

import asyncio
import logging
import uuid
from contextlib import contextmanager

from user_service.core.credential_policy import (
    DEFAULT_ROUNDS, hash_password, validate_password,
)
from user_service.core.domain_types import Pagination, UserId, UserState
from user_service.core.errors import (
    InvalidIdentifierError, StoreUnavailableError, UserServiceError,
)
from user_service.core.repository_protocols import ConnectionHealth, UserRepository
from user_service.core.user_record import EMPTY_SUMMARY, UserRecord
from user_service.schemas.user import (
    CreateUserRequest, CreateUserResponse,
    DeleteUserRequest, DeleteUserResponse,
    GetUserByEmailRequest, GetUserByIDRequest, GetUserResponse,
    GetUsersRequest, GetUsersResponse,
    UpdateUserRequest, UpdateUserResponse,
    UserInfo,
)

logger = logging.getLogger(__name__)


@contextmanager
def _log_failures(operation: str):
    try:
        yield
    except UserServiceError as e:
        if e.context.operation is None:
            e.context.operation = operation
        logger.warning(
            f"{operation}: {e.message}",
            extra={"operation": operation, "error_code": e.code},
        )
        raise


def parse_user_id(value: str) -> UserId:
    """Canonical UUID string to UserId; InvalidIdentifierError otherwise."""
    try:
        return UserId(uuid.UUID(value))
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidIdentifierError(str(value)) from e


class UserRequestHandler:
    """Service façade behind the UserService RPC surface."""

    def __init__(
        self,
        store: UserRepository,
        health: ConnectionHealth | None = None,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self.store = store
        self.health = health
        self.bcrypt_rounds = bcrypt_rounds

    def _ensure_store_available(self) -> None:
        if self.health is not None and not self.health.is_healthy:
            raise StoreUnavailableError(self.health.state.value)

    async def create_user(self, req: CreateUserRequest) -> CreateUserResponse:
        with _log_failures("CreateUser"):
            validate_password(req.password)
            password_hash = await asyncio.to_thread(
                hash_password, req.password, self.bcrypt_rounds,
            )
            self._ensure_store_available()

            record = UserRecord(
                oid=UserId(uuid.uuid4()),
                nickname=req.user.nickname,
                email=req.user.email,
                first_name=req.user.first_name,
                last_name=req.user.last_name,
                password_hash=password_hash,
                state=UserState.ACTIVE,
            )
            await self.store.create_user(record)

        logger.info(
            f"Successfully created user {record.nickname}",
            extra={"operation": "CreateUser", "user_id": str(record.oid)},
        )
        return CreateUserResponse(oid=str(record.oid))

    async def get_user_by_email(self, req: GetUserByEmailRequest) -> GetUserResponse:
        with _log_failures("GetUserByEmail"):
            self._ensure_store_available()
            record = await self.store.get_user_by_email(req.email)
        summary = record.summary() if record else EMPTY_SUMMARY
        return GetUserResponse(user=UserInfo.from_summary(summary))

    async def get_user_by_id(self, req: GetUserByIDRequest) -> GetUserResponse:
        with _log_failures("GetUserByID"):
            oid = parse_user_id(req.oid)
            self._ensure_store_available()
            record = await self.store.get_user_by_id(oid)
        summary = record.summary() if record else EMPTY_SUMMARY
        return GetUserResponse(user=UserInfo.from_summary(summary))

    async def get_users(self, req: GetUsersRequest | None = None) -> GetUsersResponse:
        pagination = None
        if req is not None and (req.limit is not None or req.offset):
            pagination = Pagination(limit=req.limit, offset=req.offset)
        with _log_failures("GetUsers"):
            self._ensure_store_available()
            users = await self.store.get_users(pagination)
        return GetUsersResponse(users=[UserInfo.from_summary(u) for u in users])

    async def update_user(self, req: UpdateUserRequest) -> UpdateUserResponse:
        with _log_failures("UpdateUser"):
            oid = parse_user_id(req.user.oid)
            self._ensure_store_available()
            matched = await self.store.update_user(UserRecord(
                oid=oid,
                nickname=req.user.nickname,
                email=req.user.email,
                first_name=req.user.first_name,
                last_name=req.user.last_name,
            ))
        if not matched:
            logger.info(
                "UpdateUser: identifier matched no rows",
                extra={"operation": "UpdateUser", "user_id": str(oid)},
            )
        return UpdateUserResponse(is_ok=True)

    async def delete_user(self, req: DeleteUserRequest) -> DeleteUserResponse:
        with _log_failures("DeleteUser"):
            oid = parse_user_id(req.oid)
            self._ensure_store_available()
            await self.store.delete_user(oid)
        return DeleteUserResponse(is_ok=True)
