"""ORM model for application users (profile, credentials and admin flag)."""

from sqlalchemy import Boolean, Column, Integer, String, Text, false
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin

GENDERS = ("male", "female", "other")


class User(TimestampMixin, Base):
    """
    Registered user.

    is_admin defaults to false and is only changed through the admin-status endpoint.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    job_role = Column(String(255), nullable=True)
    avatar = Column(String(2048), nullable=True)
    bio = Column(Text, nullable=True)
    address = Column(String(255), nullable=True)
    gender = Column(String(16), nullable=True)
    phone = Column(String(64), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    posts = relationship("Post", back_populates="user", passive_deletes=True)
    comments = relationship("Comment", back_populates="user", passive_deletes=True)
    tokens = relationship("AccessToken", back_populates="user", passive_deletes=True)
