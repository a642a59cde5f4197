"""Boundary Protocols: contracts between the request handler and the storage shell.

Invariants:
    - The handler never imports infrastructure modules; it depends on these Protocols
    - Implementations provided by the application lifespan via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from user_service.core.domain_types import ConnectionState, Pagination, UserId
from user_service.core.user_record import UserRecord, UserSummary


class UserRepository(Protocol):
    """Contract for user persistence, implemented by infrastructure/user_store.py."""
    async def create_user(self, record: UserRecord) -> None: ...
    async def get_user_by_id(self, oid: UserId) -> UserRecord | None: ...
    async def get_user_by_email(self, email: str) -> UserRecord | None: ...
    async def get_users(
        self, pagination: Pagination | None = None,
    ) -> list[UserSummary]: ...
    async def update_user(self, record: UserRecord) -> bool: ...
    async def delete_user(self, oid: UserId) -> bool: ...


class ConnectionHealth(Protocol):
    """Observable store health, implemented by the connection supervisor."""
    @property
    def state(self) -> ConnectionState: ...

    @property
    def is_healthy(self) -> bool: ...
