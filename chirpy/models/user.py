"""User data models for Chirpy."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class User(BaseModel):
    """User as returned to clients. Never carries the password hash."""

    id: UUID = Field(..., description="Unique user identifier (UUID v4)")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")
    email: str = Field(..., description="User email address")


class StoredUser(User):
    """User row including the password hash. Internal only."""

    hashed_password: str = Field(..., description="bcrypt digest of the user's password")

    def to_public(self) -> User:
        """Drop the password hash for serialization."""
        return User(**self.model_dump(exclude={"hashed_password"}))
