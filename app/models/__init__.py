"""SQLAlchemy ORM models."""

from app.models.access_token import AccessToken
from app.models.base import Base
from app.models.comment import Comment
from app.models.post import Post
from app.models.user import User

__all__ = ["AccessToken", "Base", "Comment", "Post", "User"]
