"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from postboard.api.dependencies import AuthContext, get_auth_context, get_current_user
from postboard.api.responses import envelope
from postboard.database import get_db
from postboard.models.user import User
from postboard.schemas.auth import AuthData, SigninInput, SignupInput, UserResponse
from postboard.services import tokens
from postboard.services.auth import authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    user_data: SignupInput,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and return a fresh token."""
    user = create_user(db, user_data)
    token = tokens.issue(db, user)

    return envelope(
        message="User registered successfully",
        data=AuthData(user=UserResponse.model_validate(user), token=token),
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/signin")
def signin(
    credentials: SigninInput,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password. Each signin mints an additional token."""
    user = authenticate_user(db, credentials)
    token = tokens.issue(db, user)

    logger.info(f"User {user.id} signed in")
    return envelope(
        message="Signed in successfully",
        data=AuthData(user=UserResponse.model_validate(user), token=token),
    )


@router.post("/signout")
def signout(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Revoke the token presented with this request only."""
    tokens.revoke(db, auth.token)
    return envelope(message="Signed out successfully")


@router.get("/user")
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return envelope(data=UserResponse.model_validate(current_user))
