"""User RPC Schemas: Pydantic request/response shapes for the UserService surface.

Invariants:
    - Identifiers travel as canonical 36-character UUID strings
    - oid fields are plain str: malformed identifiers reach the handler and fail
      as INVALID_IDENTIFIER, not as a generic validation error
    - Responses never carry the password hash
"""

from pydantic import BaseModel, Field

from user_service.core.user_record import UserSummary


class UserInfo(BaseModel):
    """Public user projection."""
    oid: str = ""
    nickname: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserInfo":
        return cls(
            oid=str(summary.oid),
            nickname=summary.nickname,
            email=summary.email,
            first_name=summary.first_name,
            last_name=summary.last_name,
        )


class CreateUserRequest(BaseModel):
    user: UserInfo
    password: str


class CreateUserResponse(BaseModel):
    oid: str


class GetUserByEmailRequest(BaseModel):
    email: str


class GetUserByIDRequest(BaseModel):
    oid: str


class GetUserResponse(BaseModel):
    user: UserInfo


class GetUsersRequest(BaseModel):
    """Optional page window; omit both fields for the full directory."""
    limit: int | None = Field(None, ge=1, le=1000)
    offset: int = Field(0, ge=0)


class GetUsersResponse(BaseModel):
    users: list[UserInfo]


class UpdateUserRequest(BaseModel):
    user: UserInfo


class UpdateUserResponse(BaseModel):
    is_ok: bool


class DeleteUserRequest(BaseModel):
    oid: str


class DeleteUserResponse(BaseModel):
    is_ok: bool
