"""Post model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """Text post owned by exactly one user."""

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_user_id_created_at", "user_id", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="posts")
