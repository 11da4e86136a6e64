"""Posts: listing, CRUD with owner/admin checks, image uploads, and flagging."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, joinedload, selectinload

from app.api.v1.auth import get_current_user
from app.api.v1.payload import read_image, read_payload
from app.api.v1.users import find_user
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import ApiError
from app.core.responses import paginated_response, success_response
from app.models import Comment, Post
from app.schemas.auth import CurrentUser
from app.schemas.post import PostCreateRequest, PostDetail, PostOut, PostUpdateRequest
from app.services.pagination import MAX_PAGE, paginate
from app.services.policy import (
    DELETE_POST_DENIED,
    UPDATE_POST_DENIED,
    authorize,
    can_delete_post,
    can_modify_post,
)
from app.services.storage import delete_file, store_file

logger = logging.getLogger(__name__)
router = APIRouter()

IMAGE_FOLDER = "posts"


def find_post(db: Session, post_id: int) -> Post:
    """Load a post by id or raise the not-found ApiError."""
    post = db.get(Post, post_id)
    if post is None:
        raise ApiError.not_found("post")
    return post


def _latest_posts(db: Session):
    return (
        db.query(Post)
        .options(joinedload(Post.user))
        .order_by(Post.created_at.desc(), Post.id.desc())
    )


@router.get("/posts")
def list_posts(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
) -> JSONResponse:
    """All posts, latest first, each with its author."""
    result = paginate(_latest_posts(db), page, settings.PAGE_SIZE)
    return paginated_response(result.map(PostOut.model_validate))


@router.post("/posts", status_code=201)
async def create_post(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """
    Create a post owned by the caller.

    Fields: title (max 255), content, type (article or gif), and optionally an
    `image` upload sent as multipart/form-data.
    """
    payload = await read_payload(request, PostCreateRequest)
    image = await read_image(payload, "image", settings)

    post = Post(
        title=payload.body.title,
        content=payload.body.content,
        type=payload.body.type,
        user_id=current_user.id,
    )
    if image is not None:
        post.image_url = store_file(image.content, image.filename, IMAGE_FOLDER, settings)
    db.add(post)
    db.commit()
    db.refresh(post)
    return success_response(PostOut.model_validate(post), "Post created successfully", 201)


@router.get("/posts/{post_id}")
def get_post(
    post_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """One post with its author and its comments (each with its author)."""
    post = (
        db.query(Post)
        .options(
            joinedload(Post.user),
            selectinload(Post.comments).joinedload(Comment.user),
        )
        .filter(Post.id == post_id)
        .first()
    )
    if post is None:
        raise ApiError.not_found("post")
    return success_response(PostDetail.model_validate(post))


@router.put("/posts/{post_id}")
async def update_post(
    post_id: int,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """Partial update by the owner or an admin; a new image replaces (and deletes) the old one."""
    post = find_post(db, post_id)
    authorize(can_modify_post(current_user, post), UPDATE_POST_DENIED)
    payload = await read_payload(request, PostUpdateRequest)
    image = await read_image(payload, "image", settings)

    for field, value in payload.fields.items():
        setattr(post, field, value)

    if image is not None:
        new_url = store_file(image.content, image.filename, IMAGE_FOLDER, settings)
        delete_file(post.image_url, settings)
        post.image_url = new_url

    db.commit()
    db.refresh(post)
    return success_response(PostOut.model_validate(post), "Post updated successfully")


@router.delete("/posts/{post_id}")
def delete_post(
    post_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """Delete a post (owner or admin). Its comments go with it; the image is removed once the row is gone."""
    post = find_post(db, post_id)
    authorize(can_delete_post(current_user, post), DELETE_POST_DENIED)

    image_url = post.image_url
    db.delete(post)
    db.commit()
    delete_file(image_url, settings)
    logger.info("Post deleted", extra={"post_id": post_id, "deleted_by": current_user.id})
    return success_response(message="Post deleted successfully")


@router.put("/posts/{post_id}/flag")
def flag_post(
    post_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Mark a post as inappropriate. Any authenticated user may flag; flags are never cleared here."""
    post = find_post(db, post_id)
    post.flagged = True
    db.commit()
    return success_response(message="Post flagged successfully")


@router.get("/users/{user_id}/posts")
def list_user_posts(
    user_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
) -> JSONResponse:
    """Posts written by one user, latest first."""
    find_user(db, user_id)
    query = _latest_posts(db).filter(Post.user_id == user_id)
    result = paginate(query, page, settings.PAGE_SIZE)
    return paginated_response(result.map(PostOut.model_validate))
