"""Repository for Chirp database operations."""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chirpy.errors import StoreError
from chirpy.models.chirp import Chirp
from chirpy.database.models import ChirpDB

logger = logging.getLogger(__name__)


class ChirpRepository:
    """Repository for Chirp database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, body: str, user_id: UUID) -> Chirp:
        """Create a new chirp for `user_id`.

        The user must exist; the foreign key rejects anything else.
        """
        try:
            chirp_db = ChirpDB(body=body, user_id=str(user_id))
            self.db.add(chirp_db)
            self.db.commit()
            self.db.refresh(chirp_db)
            logger.debug(f"Created chirp {chirp_db.id} for user {user_id}")
            return chirp_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create chirp for user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to create chirp") from e

    def get(self, chirp_id: UUID) -> Optional[Chirp]:
        """Get chirp by ID."""
        try:
            chirp_db = self.db.query(ChirpDB).filter(ChirpDB.id == str(chirp_id)).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to get chirp {chirp_id}: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to get chirp") from e
        return chirp_db.to_pydantic() if chirp_db else None

    def list_all(self) -> List[Chirp]:
        """Get all chirps sorted by creation date (oldest first)."""
        try:
            chirps_db = self.db.query(ChirpDB).order_by(asc(ChirpDB.created_at), asc(ChirpDB.seq)).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to list chirps: {type(e).__name__}: {str(e)}")
            raise StoreError("failed to list chirps") from e
        return [chirp_db.to_pydantic() for chirp_db in chirps_db]
