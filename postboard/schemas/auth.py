"""Authentication schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class SignupInput(BaseModel):
    """User registration request.

    Fields are optional here so that missing values are reported by
    ``validate_signup`` together with every other field error.
    """

    name: Any = None
    email: Any = None
    password: Any = None
    password_confirmation: Any = None


class SigninInput(BaseModel):
    """User login request."""

    email: Any = None
    password: Any = None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthData(BaseModel):
    """Payload returned by signup and signin."""

    user: UserResponse
    token: str
