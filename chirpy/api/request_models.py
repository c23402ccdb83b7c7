"""Request/response bodies for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field


class UserCredentialsRequest(BaseModel):
    """Body for user creation and login."""
    email: str = Field(..., description="User email address (not format-checked)")
    password: str = Field(..., description="Plaintext password")


class CreateChirpRequest(BaseModel):
    """Body for chirp creation."""
    body: str = Field(..., description="Chirp text")
    user_id: UUID = Field(..., description="ID of the posting user")


class ErrorResponse(BaseModel):
    """Error body returned with failure statuses."""
    error: str
