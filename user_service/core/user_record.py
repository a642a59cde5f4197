"""User Record: persisted profile data and its public-safe projection.

Invariants:
    - UserRecord carries the password hash; UserSummary never does
    - EMPTY_SUMMARY is the only representation of "absent" that leaves the service
"""

from dataclasses import dataclass
from datetime import datetime

from user_service.core.domain_types import NIL_USER_ID, UserId, UserState


@dataclass
class UserRecord:
    """One user's full row, as stored."""
    oid: UserId
    nickname: str
    email: str
    first_name: str
    last_name: str
    password_hash: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    state: UserState = UserState.ACTIVE

    def summary(self) -> "UserSummary":
        return UserSummary(
            oid=self.oid,
            nickname=self.nickname,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
        )


@dataclass(frozen=True)
class UserSummary:
    """Public projection: identifier and display fields only."""
    oid: UserId
    nickname: str
    email: str
    first_name: str
    last_name: str

    @property
    def is_empty(self) -> bool:
        return self.oid == NIL_USER_ID


EMPTY_SUMMARY = UserSummary(
    oid=NIL_USER_ID, nickname="", email="", first_name="", last_name="",
)
