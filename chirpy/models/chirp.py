"""Chirp data model for Chirpy."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Chirp(BaseModel):
    """A short text post."""

    id: UUID = Field(..., description="Unique chirp identifier (UUID v4)")
    created_at: datetime = Field(..., description="Chirp creation timestamp")
    updated_at: datetime = Field(..., description="Chirp last update timestamp")
    body: str = Field(..., description="Chirp text, at most 140 characters")
    user_id: UUID = Field(..., description="ID of the user who posted the chirp")
