"""Personal access token model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin


class PersonalAccessToken(Base, TimestampMixin):
    """Opaque bearer token bound to a user.

    Only the SHA-256 digest of the secret is stored; the plaintext is handed
    to the client once at issue time. Revoking a token deletes its row.
    """

    __tablename__ = "personal_access_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    token = Column(String(64), unique=True, nullable=False, index=True)
    last_used_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="tokens")
