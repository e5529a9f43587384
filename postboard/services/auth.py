"""Credential store: user creation and password verification."""

import logging
from functools import lru_cache

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from postboard.models.user import User
from postboard.schemas.auth import SigninInput, SignupInput
from postboard.services.errors import AuthenticationError, ConflictError, ValidationError
from postboard.services.validation import validate_signin, validate_signup

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

EMAIL_TAKEN_MESSAGE = "The email has already been taken."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


@lru_cache
def _dummy_hash() -> str:
    # Verified against when the email is unknown so both failure paths cost a hash.
    return get_password_hash("not-a-real-password")


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by exact email match."""
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, data: SignupInput) -> User:
    """Register a new user.

    Raises:
        ValidationError: one or more fields violate their rules.
        ConflictError: the email is already registered.
    """
    errors = validate_signup(data)
    if errors:
        raise ValidationError(errors)

    if get_user_by_email(db, data.email) is not None:
        raise ConflictError("email", EMAIL_TAKEN_MESSAGE)

    user = User(name=data.name, email=data.email, password_hash=get_password_hash(data.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise ConflictError("email", EMAIL_TAKEN_MESSAGE) from None
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def verify_credentials(db: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches.

    Unknown email and wrong password raise the same error.
    """
    user = get_user_by_email(db, email)
    if user is None:
        verify_password(password, _dummy_hash())
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    return user


def authenticate_user(db: Session, data: SigninInput) -> User:
    """Validate a login payload and verify its credentials."""
    errors = validate_signin(data)
    if errors:
        raise ValidationError(errors)
    return verify_credentials(db, data.email, data.password)
