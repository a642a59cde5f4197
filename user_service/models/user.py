"""User ORM: the `users` table backing the directory.

Invariants:
    - oid is a UUID primary key assigned by the service (no server default)
    - email is UNIQUE; storage is the authority on duplicates
    - created_at/updated_at are timezone-aware UTC timestamps
    - state stores UserState as a small integer
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from user_service.db.base import Base


class User(Base):
    """User row."""
    __tablename__ = "users"

    oid: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    nickname: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    state: Mapped[int] = mapped_column(SmallInteger, nullable=False)
