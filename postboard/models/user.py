"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    tokens = relationship(
        "PersonalAccessToken", back_populates="user", cascade="all, delete-orphan"
    )
    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")
