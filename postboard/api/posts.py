"""Post API endpoints.

Every route requires a bearer token. A request body that is not valid JSON
is rejected with 422 while the request is parsed, before the token is
checked; every other failure happens after authentication.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Query, status

from postboard.api.dependencies import get_current_user, get_post_service
from postboard.api.responses import envelope
from postboard.database import MAX_INTEGER_ID
from postboard.models.user import User
from postboard.schemas.post import PostInput
from postboard.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

# Out-of-range ids fail path validation, which is rendered as 404
PostId = Annotated[int, Path(ge=1, le=MAX_INTEGER_ID)]
OptionalPostBody = Annotated[PostInput | None, Body()]


@router.get("")
def list_posts(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
    page: Annotated[int | None, Query()] = None,
    per_page: Annotated[int | None, Query()] = None,
):
    """List the current user's posts, newest first."""
    result = service.list_for_owner(current_user, page, per_page)
    return envelope(data=service.serialize_page(result))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
    post_data: OptionalPostBody = None,
):
    """Create a post owned by the current user."""
    post = service.create(current_user, post_data or PostInput())
    return envelope(
        message="Post created successfully",
        data=service.serialize(post),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{post_id}")
def get_post(
    post_id: PostId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Get a post by id.

    Any authenticated user can read any post; only writes are owner-only.
    """
    post = service.get(post_id)
    return envelope(data=service.serialize(post))


@router.put("/{post_id}")
def update_post(
    post_id: PostId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
    post_data: OptionalPostBody = None,
):
    """Update the title and/or content of an owned post.

    A missing body is an update with no fields: it still requires ownership.
    """
    post = service.update(current_user, post_id, post_data or PostInput())
    return envelope(message="Post updated successfully", data=service.serialize(post))


@router.delete("/{post_id}")
def delete_post(
    post_id: PostId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Delete an owned post."""
    service.delete(current_user, post_id)
    return envelope(message="Post deleted successfully")
