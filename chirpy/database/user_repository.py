"""Repository for User database operations."""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chirpy.errors import StoreError
from chirpy.models.user import StoredUser
from chirpy.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, email: str, hashed_password: str) -> StoredUser:
        """Create a new user.

        Args:
            email: User email (must be unique)
            hashed_password: Digest from :func:`chirpy.auth.passwords.hash_password`

        Returns:
            Created user, including its hash

        Raises:
            StoreError: If the insert fails (duplicate email included)
        """
        try:
            user_db = UserDB(email=email, hashed_password=hashed_password)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}: {email}")
            return user_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user {email}: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to create user") from e

    def get_by_email(self, email: str) -> Optional[StoredUser]:
        """Get user by email."""
        try:
            user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to look up user {email}: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to look up user") from e
        return user_db.to_pydantic() if user_db else None

    def delete_all(self) -> int:
        """Delete every user. Chirps go with them via ON DELETE CASCADE.

        Returns:
            Number of users deleted
        """
        try:
            deleted = self.db.query(UserDB).delete(synchronize_session=False)
            self.db.commit()
            logger.info(f"Deleted {deleted} users")
            return deleted
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete users: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to reset users") from e
