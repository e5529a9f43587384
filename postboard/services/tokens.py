"""Token authority: issue, resolve and revoke opaque bearer tokens.

A plaintext token has the form ``<id>|<secret>``. Only the SHA-256 digest of
the secret is persisted, so a leaked database does not leak usable tokens.
Tokens do not expire; they stay valid until revoked.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from postboard.config import get_settings
from postboard.database import MAX_INTEGER_ID
from postboard.models.personal_access_token import PersonalAccessToken
from postboard.models.user import User
from postboard.services.errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_NAME = "auth_token"  # noqa: S105
SEPARATOR = "|"


def hash_token(secret: str) -> str:
    """Digest stored in place of the token secret."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def generate_secret() -> str:
    """Generate a fresh unguessable token secret."""
    return secrets.token_urlsafe(get_settings().token_entropy_bytes)


def issue(db: Session, user: User, name: str = DEFAULT_TOKEN_NAME) -> str:
    """Mint a token for ``user`` and return its plaintext.

    The plaintext is not retrievable again after this call.
    """
    secret = generate_secret()
    token = PersonalAccessToken(user_id=user.id, name=name, token=hash_token(secret))
    db.add(token)
    db.commit()
    db.refresh(token)

    logger.info(f"Issued token {token.id} for user {user.id}")
    return f"{token.id}{SEPARATOR}{secret}"


def find_token(db: Session, plaintext: str) -> PersonalAccessToken | None:
    """Look up the stored token matching ``plaintext``."""
    if SEPARATOR not in plaintext:
        return (
            db.query(PersonalAccessToken)
            .filter(PersonalAccessToken.token == hash_token(plaintext))
            .first()
        )

    token_id, secret = plaintext.split(SEPARATOR, 1)
    if not (token_id.isascii() and token_id.isdigit()) or not secret:
        return None
    if not 1 <= int(token_id) <= MAX_INTEGER_ID:
        return None

    token = db.query(PersonalAccessToken).filter(PersonalAccessToken.id == int(token_id)).first()
    if token is None or not hmac.compare_digest(token.token, hash_token(secret)):
        return None
    return token


def resolve(db: Session, plaintext: str) -> PersonalAccessToken:
    """Resolve a plaintext token to its live record.

    Raises:
        AuthenticationError: the token is unknown or has been revoked.
    """
    token = find_token(db, plaintext)
    if token is None or token.user is None:
        raise AuthenticationError()

    token.last_used_at = datetime.now(UTC)
    db.commit()
    db.refresh(token)
    return token


def revoke(db: Session, token: PersonalAccessToken) -> None:
    """Delete exactly this token. Other tokens of the same user stay valid."""
    token_id, user_id = token.id, token.user_id
    db.delete(token)
    db.commit()
    logger.info(f"Revoked token {token_id} for user {user_id}")
