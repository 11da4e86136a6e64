"""Comments on posts: list, create, read, update and delete, plus a user's comment history."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, joinedload

from app.api.v1.auth import get_current_user
from app.api.v1.payload import read_payload
from app.api.v1.posts import find_post
from app.api.v1.users import find_user
from app.core.database import get_db
from app.core.errors import ApiError
from app.core.responses import success_response
from app.models import Comment, Post
from app.schemas.auth import CurrentUser
from app.schemas.comment import CommentOut, CommentRequest
from app.schemas.post import CommentWithPost
from app.services.policy import (
    DELETE_COMMENT_DENIED,
    UPDATE_COMMENT_DENIED,
    authorize,
    can_delete_comment,
    can_modify_comment,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def find_comment(db: Session, post: Post, comment_id: int) -> Comment:
    """Load a comment that belongs to post, or raise the not-found ApiError."""
    comment = (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.id == comment_id, Comment.post_id == post.id)
        .first()
    )
    if comment is None:
        raise ApiError.not_found("comment")
    return comment


@router.get("/posts/{post_id}/comments")
def list_post_comments(
    post_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """All comments on a post, latest first, each with its author."""
    post = find_post(db, post_id)
    comments = (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.post_id == post.id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )
    return success_response([CommentOut.model_validate(c) for c in comments])


@router.post("/posts/{post_id}/comments", status_code=201)
async def create_comment(
    post_id: int,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    post = find_post(db, post_id)
    payload = await read_payload(request, CommentRequest)

    comment = Comment(
        comment=payload.body.comment,
        user_id=current_user.id,
        post_id=post.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return success_response(CommentOut.model_validate(comment), "Comment added successfully", 201)


@router.get("/posts/{post_id}/comments/{comment_id}")
def get_comment(
    post_id: int,
    comment_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    post = find_post(db, post_id)
    return success_response(CommentOut.model_validate(find_comment(db, post, comment_id)))


@router.put("/posts/{post_id}/comments/{comment_id}")
async def update_comment(
    post_id: int,
    comment_id: int,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Edit the comment text (comment owner or admin). Owner and parent post never change."""
    post = find_post(db, post_id)
    comment = find_comment(db, post, comment_id)
    authorize(can_modify_comment(current_user, comment), UPDATE_COMMENT_DENIED)
    payload = await read_payload(request, CommentRequest)

    comment.comment = payload.body.comment
    db.commit()
    db.refresh(comment)
    return success_response(CommentOut.model_validate(comment), "Comment updated successfully")


@router.delete("/posts/{post_id}/comments/{comment_id}")
def delete_comment(
    post_id: int,
    comment_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Delete a comment: allowed for its author, the post's author, or an admin."""
    post = find_post(db, post_id)
    comment = find_comment(db, post, comment_id)
    authorize(can_delete_comment(current_user, comment, post), DELETE_COMMENT_DENIED)

    db.delete(comment)
    db.commit()
    logger.info(
        "Comment deleted",
        extra={"post_id": post.id, "comment_id": comment_id, "deleted_by": current_user.id},
    )
    return success_response(message="Comment deleted successfully")


@router.get("/users/{user_id}/comments")
def list_user_comments(
    user_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Comments written by one user, latest first, each with its author and post."""
    find_user(db, user_id)
    comments = (
        db.query(Comment)
        .options(joinedload(Comment.user), joinedload(Comment.post))
        .filter(Comment.user_id == user_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )
    return success_response([CommentWithPost.model_validate(c) for c in comments])
