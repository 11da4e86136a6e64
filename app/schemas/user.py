"""Schemas for user profiles and admin status."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Gender = Literal["male", "female", "other"]


class UserOut(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    department: str | None = None
    job_role: str | None = None
    avatar: str | None = None
    bio: str | None = None
    address: str | None = None
    gender: Gender | None = None
    phone: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    """Self-service profile fields; all optional, omitted or null fields are left unchanged. is_admin is not accepted."""

    model_config = {"extra": "ignore"}

    name: str | None = Field(default=None, min_length=1, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    job_role: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    address: str | None = Field(default=None, max_length=255)
    gender: Gender | None = None
    phone: str | None = Field(default=None, max_length=64)


class AdminStatusRequest(BaseModel):
    is_admin: bool
