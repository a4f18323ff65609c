# app/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["consumer", "supplier", "admin"]

# Roles a client may request on first sync. Admin is granted manually.
SelfAssignableRole = Literal["consumer", "supplier"]


def _normalize_optional_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class SyncUserRequest(SQLModel):
    """
    Payload sent by the client after every successful sign-in.

    Only `external_id` and `email` are required; `full_name` and `role` are
    used once, when the row is first created.
    """

    model_config = ConfigDict(extra="ignore")

    external_id: str = Field(min_length=1, max_length=128)
    email: EmailStr
    full_name: str | None = Field(default=None, max_length=200)
    role: SelfAssignableRole | None = None

    @field_validator("external_id")
    @classmethod
    def strip_external_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("external_id cannot be empty")
        return v

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_optional_name(v)


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    external_id: str
    email: str
    full_name: str
    role: Role
    created_at: datetime
    updated_at: datetime


class SyncedUser(SQLModel):
    """
    User returned by /auth/sync-user.

    When the store is unreachable the row cannot be read or written; the
    response is then built from the request itself, `id` carries the external
    id and `sync_pending` is true.
    """

    id: str
    external_id: str
    email: str
    full_name: str
    role: Role
    sync_pending: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdate(SQLModel):
    """
    Profile update. Only the display name is editable.
    """

    model_config = ConfigDict(extra="ignore")

    full_name: str = Field(max_length=200)

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty")
        return v


class SyncUserResponse(SQLModel):
    success: bool = True
    message: str
    user: SyncedUser


class UserResponse(SQLModel):
    success: bool = True
    message: str | None = None
    user: UserRead
