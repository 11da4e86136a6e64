"""Schemas for posts."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.comment import CommentOut
from app.schemas.user import UserOut

PostType = Literal["article", "gif"]


class PostCreateRequest(BaseModel):
    model_config = {"extra": "ignore"}

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: PostType


class PostUpdateRequest(BaseModel):
    """Partial update; fields that are present must be non-empty. Ownership cannot be changed."""

    model_config = {"extra": "ignore"}

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    type: PostType | None = None


class PostBase(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    title: str
    content: str
    type: PostType
    image_url: str | None = None
    user_id: int
    flagged: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PostOut(PostBase):
    """Post with its author."""

    user: UserOut | None = None


class PostDetail(PostOut):
    """Single-post view: author plus comments, each with its author."""

    comments: list[CommentOut] = Field(default_factory=list)


class CommentWithPost(CommentOut):
    """Comment with its author and the post it belongs to (used for a user's comment list)."""

    post: PostBase | None = None
