"""FastAPI dependencies for authentication and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from postboard.database import get_db
from postboard.models.personal_access_token import PersonalAccessToken
from postboard.models.user import User
from postboard.services import tokens
from postboard.services.errors import AuthenticationError
from postboard.services.posts import PostService

# Missing or malformed headers are reported by get_auth_context as a 401
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from the bearer token of the current request."""

    user: User
    token: PersonalAccessToken


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    token = tokens.resolve(db, credentials.credentials)
    return AuthContext(user=token.user, token=token)


def get_current_user(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> User:
    """Get the current authenticated user."""
    return auth.user


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)
