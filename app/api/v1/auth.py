"""Registration, login/logout, the current-user endpoint and the auth dependencies."""

import logging
from datetime import UTC, datetime
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import ApiError
from app.core.responses import success_response
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    new_token_id,
    token_expiry,
    verify_password,
)
from app.models import AccessToken, User
from app.schemas.auth import AuthPayload, CurrentUser, LoginRequest, RegisterRequest
from app.schemas.user import UserOut

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def issue_token(db: Session, user: User, settings: Settings) -> str:
    """
    Persist an access_tokens row for user and return the signed JWT that references it.

    The user's expired rows are deleted in the same transaction.
    """
    db.query(AccessToken).filter(
        AccessToken.user_id == user.id,
        AccessToken.expires_at < datetime.now(UTC),
    ).delete(synchronize_session=False)
    jti = new_token_id()
    expires_at = token_expiry(settings)
    db.add(AccessToken(user_id=user.id, jti=jti, expires_at=expires_at))
    return create_access_token(sub=user.id, jti=jti, expires_at=expires_at, settings=settings)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid, unrevoked Bearer JWT and return the acting user."""
    if credentials is None:
        raise ApiError.unauthenticated()
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise ApiError.unauthenticated()
    sub = payload.get("sub")
    jti = payload.get("jti")
    if not sub or not jti:
        raise ApiError.unauthenticated()
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise ApiError.unauthenticated()
    token = (
        db.query(AccessToken)
        .filter(AccessToken.jti == jti, AccessToken.user_id == user_id)
        .first()
    )
    if token is None:
        raise ApiError.unauthenticated()
    user = db.get(User, user_id)
    if user is None:
        raise ApiError.unauthenticated()
    return CurrentUser(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        token_id=jti,
    )


@router.post("/register", status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """Create an account (never an admin) and return it with a bearer token."""
    if db.query(User).filter(User.email == body.email).first() is not None:
        raise ApiError.validation({"email": ["The email has already been taken."]})

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        department=body.department,
        job_role=body.job_role,
        gender=body.gender,
        address=body.address,
        phone=body.phone,
        is_admin=False,
    )
    db.add(user)
    db.flush()
    token = issue_token(db, user, settings)
    db.commit()
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})

    payload = AuthPayload(user=UserOut.model_validate(user), token=token)
    return success_response(payload, "User registered successfully", 201)


@router.post("/login")
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = db.query(User).filter(User.email == body.email).first()
    if user is None or not verify_password(body.password, user.password_hash):
        raise ApiError.validation({"email": ["The provided credentials are incorrect."]})

    token = issue_token(db, user, settings)
    db.commit()
    logger.info("User logged in", extra={"user_id": user.id})

    payload = AuthPayload(user=UserOut.model_validate(user), token=token)
    return success_response(payload, "User logged in successfully")


@router.post("/logout")
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Revoke the token used for this request; other sessions stay valid."""
    db.query(AccessToken).filter(AccessToken.jti == current_user.token_id).delete(
        synchronize_session=False
    )
    db.commit()
    logger.info("User logged out", extra={"user_id": current_user.id})
    return success_response(message="User logged out successfully")


@router.get("/user")
def get_authenticated_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Return the authenticated user's profile."""
    user = db.get(User, current_user.id)
    return success_response({"user": UserOut.model_validate(user)})
