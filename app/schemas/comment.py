"""Schemas for comments."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.user import UserOut


class CommentRequest(BaseModel):
    """Body for creating or updating a comment."""

    model_config = {"extra": "ignore"}

    comment: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    """Comment with its author."""

    model_config = {"from_attributes": True}

    id: int
    comment: str
    user_id: int
    post_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserOut | None = None
