"""ORM model for posts (articles and gif/image posts)."""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin

POST_TYPES = ("article", "gif")


class Post(TimestampMixin, Base):
    """
    A post owned by its creator (user_id is set once at creation).

    Comments are removed by the database (ON DELETE CASCADE) when the post is deleted.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("type IN ('article', 'gif')", name="ck_posts_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    image_url = Column(String(2048), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    flagged = Column(Boolean, nullable=False, default=False, server_default=false())

    user = relationship("User", back_populates="posts")
    comments = relationship(
        "Comment",
        back_populates="post",
        passive_deletes=True,
        order_by="Comment.id",
    )
