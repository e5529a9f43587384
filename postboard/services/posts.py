"""Post repository: ownership-scoped CRUD for posts."""

import logging
import math
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from postboard.config import get_settings
from postboard.database import MAX_INTEGER_ID
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.post import OwnerSummary, PaginatedPosts, PostInput, PostResponse
from postboard.services.errors import AuthorizationError, NotFoundError, ValidationError
from postboard.services.validation import validate_post_create, validate_post_update

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post not found"


@dataclass
class Page:
    """A page of posts plus the numbers needed to navigate the rest."""

    items: list[Post]
    total: int
    current_page: int
    per_page: int
    owners: dict[int, OwnerSummary] = field(default_factory=dict)

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def from_(self) -> int | None:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def to(self) -> int | None:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + len(self.items)


def normalize_pagination(page: int | None, per_page: int | None) -> tuple[int, int]:
    """Clamp page and page size into their valid ranges."""
    settings = get_settings()
    if page is None or page < 1:
        page = 1
    page = min(page, MAX_INTEGER_ID)
    if per_page is None:
        per_page = settings.default_per_page
    per_page = min(max(per_page, 1), settings.max_per_page)
    return page, per_page


class PostService:
    """Service for post storage and ownership checks.

    ``get`` is readable by any authenticated user. Only ``update`` and
    ``delete`` are restricted to the post's owner.
    """

    def __init__(self, db: Session):
        self.db = db

    def owner_summaries(self, user_ids: set[int]) -> dict[int, OwnerSummary]:
        """Project owners down to id, name and email in one query."""
        if not user_ids:
            return {}
        rows = (
            self.db.query(User.id, User.name, User.email).filter(User.id.in_(user_ids)).all()
        )
        return {
            row.id: OwnerSummary(id=row.id, name=row.name, email=row.email) for row in rows
        }

    def owner_summary(self, post: Post) -> OwnerSummary:
        return self.owner_summaries({post.user_id})[post.user_id]

    def serialize(self, post: Post, owner: OwnerSummary | None = None) -> PostResponse:
        """Build the response body for a post, embedding its owner."""
        return PostResponse(
            id=post.id,
            user_id=post.user_id,
            title=post.title,
            content=post.content,
            created_at=post.created_at,
            updated_at=post.updated_at,
            user=owner or self.owner_summary(post),
        )

    def serialize_page(self, page: Page) -> PaginatedPosts:
        return PaginatedPosts(
            data=[self.serialize(post, page.owners[post.user_id]) for post in page.items],
            current_page=page.current_page,
            last_page=page.last_page,
            per_page=page.per_page,
            total=page.total,
            from_=page.from_,
            to=page.to,
        )

    def list_for_owner(
        self, caller: User, page: int | None = None, per_page: int | None = None
    ) -> Page:
        """List the caller's posts, newest first."""
        page, per_page = normalize_pagination(page, per_page)

        query = self.db.query(Post).filter(Post.user_id == caller.id)
        total = query.count()
        items = (
            query.order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )

        return Page(
            items=items,
            total=total,
            current_page=page,
            per_page=per_page,
            owners=self.owner_summaries({post.user_id for post in items}),
        )

    def create(self, caller: User, data: PostInput) -> Post:
        """Create a post owned by the caller."""
        errors = validate_post_create(data)
        if errors:
            raise ValidationError(errors)

        post = Post(user_id=caller.id, title=data.title, content=data.content)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {caller.id} created post {post.id}")
        return post

    def get(self, post_id: int) -> Post:
        """Fetch any post by id, regardless of owner."""
        if not 1 <= post_id <= MAX_INTEGER_ID:
            raise NotFoundError(POST_NOT_FOUND_MESSAGE)
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if post is None:
            raise NotFoundError(POST_NOT_FOUND_MESSAGE)
        return post

    def _get_owned_for_write(self, caller: User, post_id: int, action: str) -> Post:
        """Lock the post row and check that the caller owns it."""
        if not 1 <= post_id <= MAX_INTEGER_ID:
            raise NotFoundError(POST_NOT_FOUND_MESSAGE)
        post = self.db.query(Post).filter(Post.id == post_id).with_for_update().first()
        if post is None:
            self.db.rollback()
            raise NotFoundError(POST_NOT_FOUND_MESSAGE)
        if post.user_id != caller.id:
            self.db.rollback()
            raise AuthorizationError(f"Unauthorized to {action} this post")
        return post

    def update(self, caller: User, post_id: int, data: PostInput) -> Post:
        """Apply the fields present in ``data`` to a post the caller owns."""
        post = self._get_owned_for_write(caller, post_id, "update")

        errors = validate_post_update(data)
        if errors:
            self.db.rollback()
            raise ValidationError(errors)

        for name in ("title", "content"):
            if name in data.model_fields_set:
                setattr(post, name, getattr(data, name))

        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {caller.id} updated post {post.id}")
        return post

    def delete(self, caller: User, post_id: int) -> None:
        """Permanently remove a post the caller owns."""
        post = self._get_owned_for_write(caller, post_id, "delete")
        self.db.delete(post)
        self.db.commit()

        logger.info(f"User {caller.id} deleted post {post_id}")
