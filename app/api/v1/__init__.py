"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, comments, health, posts, users

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, tags=["users"])
router.include_router(posts.router, tags=["posts"])
router.include_router(comments.router, tags=["comments"])
