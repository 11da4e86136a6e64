"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthPayload,
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
)
from app.schemas.comment import CommentOut, CommentRequest
from app.schemas.health import HealthStatus
from app.schemas.post import (
    CommentWithPost,
    PostBase,
    PostCreateRequest,
    PostDetail,
    PostOut,
    PostUpdateRequest,
)
from app.schemas.user import AdminStatusRequest, ProfileUpdateRequest, UserOut

__all__ = [
    "AdminStatusRequest",
    "AuthPayload",
    "ChangePasswordRequest",
    "CommentOut",
    "CommentRequest",
    "CommentWithPost",
    "CurrentUser",
    "HealthStatus",
    "LoginRequest",
    "PostBase",
    "PostCreateRequest",
    "PostDetail",
    "PostOut",
    "PostUpdateRequest",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "UserOut",
]
