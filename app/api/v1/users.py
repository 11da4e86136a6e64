"""User directory, self-service profile/password, and admin-status management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.api.v1.payload import read_image, read_payload
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import ApiError
from app.core.responses import paginated_response, success_response
from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.auth import ChangePasswordRequest, CurrentUser
from app.schemas.user import AdminStatusRequest, ProfileUpdateRequest, UserOut
from app.services.pagination import MAX_PAGE, paginate
from app.services.policy import ADMIN_ONLY_DENIED, authorize, can_set_admin_status
from app.services.storage import delete_file, store_file

logger = logging.getLogger(__name__)
router = APIRouter()

AVATAR_FOLDER = "avatars"


def find_user(db: Session, user_id: int) -> User:
    """Load a user by id or raise the not-found ApiError."""
    user = db.get(User, user_id)
    if user is None:
        raise ApiError.not_found("user")
    return user


@router.get("/users")
def list_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
) -> JSONResponse:
    """Paginated list of all users, ordered by id."""
    result = paginate(db.query(User).order_by(User.id), page, settings.PAGE_SIZE)
    return paginated_response(result.map(UserOut.model_validate))


@router.get("/users/{user_id}")
def get_user(
    user_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    return success_response(UserOut.model_validate(find_user(db, user_id)))


@router.put("/profile")
async def update_profile(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """
    Update the authenticated user's own profile.

    Send JSON, or multipart/form-data when uploading an `avatar` image
    (jpeg/png/jpg/gif, at most MAX_UPLOAD_KB). The previous avatar file is
    removed when a new one is stored. is_admin cannot be changed here.
    """
    payload = await read_payload(request, ProfileUpdateRequest)
    avatar = await read_image(payload, "avatar", settings)

    user = find_user(db, current_user.id)
    for field, value in payload.fields.items():
        setattr(user, field, value)

    if avatar is not None:
        new_url = store_file(avatar.content, avatar.filename, AVATAR_FOLDER, settings)
        delete_file(user.avatar, settings)
        user.avatar = new_url

    db.commit()
    db.refresh(user)
    return success_response(UserOut.model_validate(user), "Profile updated successfully")


@router.post("/change-password")
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Replace the password after re-verifying the current one."""
    user = find_user(db, current_user.id)
    if not verify_password(body.current_password, user.password_hash):
        raise ApiError.validation(
            {"current_password": ["The current password is incorrect."]}
        )
    user.password_hash = hash_password(body.password)
    db.commit()
    return success_response(message="Password changed successfully")


@router.put("/users/{user_id}/admin-status")
async def update_admin_status(
    user_id: int,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Grant or revoke admin rights on another account (admins only)."""
    authorize(can_set_admin_status(current_user), ADMIN_ONLY_DENIED)
    target = find_user(db, user_id)
    payload = await read_payload(request, AdminStatusRequest)

    target.is_admin = payload.body.is_admin
    db.commit()
    db.refresh(target)
    logger.info(
        "Admin status changed",
        extra={"user_id": target.id, "is_admin": target.is_admin, "changed_by": current_user.id},
    )
    return success_response(
        UserOut.model_validate(target), "User admin status updated successfully"
    )
