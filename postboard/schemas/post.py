"""Post schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostInput(BaseModel):
    """Create or update a post.

    On update, ``model_fields_set`` tells which fields the client sent.
    """

    title: Any = None
    content: Any = None


class OwnerSummary(BaseModel):
    """Minimal projection of a post's owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: OwnerSummary


class PaginatedPosts(BaseModel):
    """One page of posts with pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[PostResponse]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None
