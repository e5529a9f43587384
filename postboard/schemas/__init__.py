"""Pydantic schemas for API requests and responses."""

from postboard.schemas.auth import AuthData, SigninInput, SignupInput, UserResponse
from postboard.schemas.common import Envelope
from postboard.schemas.post import OwnerSummary, PaginatedPosts, PostInput, PostResponse

__all__ = [
    "SignupInput",
    "SigninInput",
    "UserResponse",
    "AuthData",
    "Envelope",
    "PostInput",
    "OwnerSummary",
    "PostResponse",
    "PaginatedPosts",
]
