"""Pydantic schemas for user management endpoints."""

from typing import Dict

from pydantic import Field, field_validator

from ..models.user import MailUser
from ..schemas import KebabModel, RequestModel
from .service import token_map


class UserEntry(KebabModel):
    superuser: bool
    tokens: Dict[str, str] = Field(default_factory=dict, description="Token label -> token")

    @classmethod
    def from_user(cls, user: MailUser) -> "UserEntry":
        return cls(superuser=user.superuser, tokens=token_map(user))


class UserListResponse(KebabModel):
    users: Dict[str, UserEntry]


class CreateUserRequest(RequestModel):
    username: str = Field(..., min_length=1, max_length=200, examples=["alice"])
    superuser: bool = False

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v
