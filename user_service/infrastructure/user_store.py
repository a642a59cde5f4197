"""User Store: CRUD against the `users` table through the shared session manager.

Invariants:
    - Point lookups return None for absence; absence is never an error here
    - update_user touches display fields and updated_at only (never password or state)
    - Timestamps are written as UTC "now" by the store, not taken from the caller
    - No duplicate-email pre-check: the UNIQUE constraint decides, surfacing as StorageFailureError

Design Decisions:
    - Returns domain dataclasses, not ORM rows: callers never hold a session-bound object
    - get_users orders by (created_at, oid) so limit/offset pages are stable
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select, update

from user_service.core.domain_types import Pagination, UserId, UserState
from user_service.core.errors import StorageFailureError
from user_service.core.user_record import UserRecord, UserSummary
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.models.user import User

logger = logging.getLogger(__name__)


def _as_user_id(value: UserId | str, operation: str) -> UserId:
    if isinstance(value, uuid.UUID):
        return UserId(value)
    try:
        return UserId(uuid.UUID(value))
    except (TypeError, ValueError) as e:
        raise StorageFailureError(f"unable to parse uuid '{value}'", operation) from e


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        oid=UserId(row.oid),
        nickname=row.nickname,
        email=row.email,
        first_name=row.first_name,
        last_name=row.last_name,
        password_hash=row.password,
        created_at=row.created_at,
        updated_at=row.updated_at,
        state=UserState(row.state),
    )


class UserStore:
    """Record Store implementation of UserRepository."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def create_user(self, record: UserRecord) -> None:
        now = datetime.now(timezone.utc)
        async with self.db.session() as session:
            session.add(User(
                oid=record.oid,
                nickname=record.nickname,
                email=record.email,
                first_name=record.first_name,
                last_name=record.last_name,
                password=record.password_hash,
                created_at=now,
                updated_at=now,
                state=int(record.state),
            ))
            await session.commit()
        record.created_at = record.updated_at = now

    async def get_user_by_id(self, oid: UserId) -> UserRecord | None:
        oid = _as_user_id(oid, "query")
        async with self.db.session() as session:
            result = await session.execute(select(User).where(User.oid == oid))
            row = result.scalar_one_or_none()
            return _to_record(row) if row else None

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(User).where(User.email == email).limit(1),
            )
            row = result.scalars().first()
            return _to_record(row) if row else None

    async def get_users(
        self, pagination: Pagination | None = None,
    ) -> list[UserSummary]:
        """All users as public projections, optionally one page of them."""
        query = select(
            User.oid, User.nickname, User.email, User.first_name, User.last_name,
        ).order_by(User.created_at, User.oid)
        if pagination is not None:
            if pagination.limit is not None:
                query = query.limit(pagination.limit)
            query = query.offset(pagination.offset)

        async with self.db.session() as session:
            result = await session.execute(query)
            return [
                UserSummary(
                    oid=UserId(r.oid),
                    nickname=r.nickname,
                    email=r.email,
                    first_name=r.first_name,
                    last_name=r.last_name,
                )
                for r in result
            ]

    async def update_user(self, record: UserRecord) -> bool:
        """Overwrite display fields; returns whether a row matched the identifier."""
        oid = _as_user_id(record.oid, "update")
        async with self.db.session() as session:
            result = await session.execute(
                update(User)
                .where(User.oid == oid)
                .values(
                    nickname=record.nickname,
                    email=record.email,
                    first_name=record.first_name,
                    last_name=record.last_name,
                    updated_at=datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False),
            )
            await session.commit()
            return result.rowcount > 0

    async def delete_user(self, oid: UserId) -> bool:
        oid = _as_user_id(oid, "delete")
        async with self.db.session() as session:
            result = await session.execute(
                delete(User)
                .where(User.oid == oid)
                .execution_options(synchronize_session=False),
            )
            await session.commit()
            matched = result.rowcount > 0
        if not matched:
            logger.debug(f"DeleteUser: no row for {oid}")
        return matched
