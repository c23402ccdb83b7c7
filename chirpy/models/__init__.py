"""Data models for Chirpy."""

from chirpy.models.user import User, StoredUser
from chirpy.models.chirp import Chirp

__all__ = [
    "User",
    "StoredUser",
    "Chirp",
]
