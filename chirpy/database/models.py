"""SQLAlchemy database models for Chirpy."""

from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey

from chirpy.database.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a timestamp read back without an offset (SQLite drops it)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    email = Column(String, nullable=False, unique=True)
    hashed_password = Column(String, nullable=False)

    def to_pydantic(self):
        """Convert database model to Pydantic model (including the password hash)."""
        from chirpy.models.user import StoredUser

        return StoredUser(
            id=self.id,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
            email=self.email,
            hashed_password=self.hashed_password,
        )


class ChirpDB(Base):
    """Database model for Chirp."""

    __tablename__ = "chirps"

    # Insertion sequence; breaks created_at ties so listing follows creation order.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True, default=lambda: str(uuid.uuid4()))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    body = Column(Text, nullable=False)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from chirpy.models.chirp import Chirp

        return Chirp(
            id=self.id,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
            body=self.body,
            user_id=self.user_id,
        )
