"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps a UUID; never pass identifier strings past the handler boundary
    - UserState is ordered: more permissive states compare greater
    - Pagination.limit is None (unbounded) or >= 1; offset is never negative

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for UserState: persisted as a small integer, ordering comes for free
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)

# Wire form of an absent record
NIL_USER_ID = UserId(UUID(int=0))


# ─── Enums ───────────────────────────────────────────────────────

class UserState(IntEnum):
    """User lifecycle states; maps to DB `state` column."""
    DELETED = -1
    BANNED = 0
    ACTIVE = 1


class ConnectionState(str, Enum):
    """Connection supervisor states, surfaced through readiness probes."""
    HEALTHY = "healthy"
    RECONNECTING = "reconnecting"
    FAILED = "failed"
    STOPPED = "stopped"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Pagination:
    """Page window for list queries."""
    limit: int | None = None
    offset: int = 0

    def __post_init__(self):
        if self.limit is not None and self.limit < 1:
            raise ValueError("limit must be >= 1")
        if self.offset < 0:
            raise ValueError("offset must be >= 0")
