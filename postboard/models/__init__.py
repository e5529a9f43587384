"""SQLAlchemy models."""

from postboard.models.personal_access_token import PersonalAccessToken
from postboard.models.post import Post
from postboard.models.user import User

__all__ = [
    "User",
    "PersonalAccessToken",
    "Post",
]
