"""Tests for ChirpRepository operations."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from chirpy.database.models import ChirpDB
from chirpy.errors import StoreError


class TestChirpRepository:
    """Test ChirpRepository create / get / list."""

    def test_create_chirp(self, chirp_repository, test_user):
        """Test creating a chirp."""
        created = chirp_repository.create("hello", test_user.id)

        assert created.body == "hello"
        assert created.user_id == test_user.id
        assert isinstance(created.id, uuid.UUID)

    def test_create_chirp_for_unknown_user(self, chirp_repository):
        """The foreign key rejects chirps for users that do not exist."""
        with pytest.raises(StoreError):
            chirp_repository.create("hello", uuid.uuid4())

    def test_get_chirp_by_id(self, chirp_repository, test_user):
        """Test retrieving a chirp by ID."""
        created = chirp_repository.create("hello", test_user.id)

        retrieved = chirp_repository.get(created.id)

        assert retrieved == created

    def test_get_nonexistent_chirp(self, chirp_repository):
        """Test retrieving a nonexistent chirp returns None."""
        assert chirp_repository.get(uuid.uuid4()) is None

    def test_list_all_empty(self, chirp_repository):
        assert chirp_repository.list_all() == []

    def test_list_all_sorted_by_creation_date(self, chirp_repository, db_session, test_user):
        """Test that list_all() returns chirps oldest first regardless of insert order."""
        now = datetime.now(timezone.utc)
        # Insert in reverse order
        for offset, body in ((2, "third"), (1, "second"), (0, "first")):
            created_at = now - timedelta(minutes=10 - offset)
            db_session.add(
                ChirpDB(
                    id=str(uuid.uuid4()),
                    body=body,
                    user_id=str(test_user.id),
                    created_at=created_at,
                    updated_at=created_at,
                )
            )
        db_session.commit()

        chirps = chirp_repository.list_all()

        assert [chirp.body for chirp in chirps] == ["first", "second", "third"]

    def test_list_all_same_timestamp_keeps_insert_order(self, chirp_repository, db_session, test_user):
        """Chirps created in the same instant still list in creation order."""
        created_at = datetime.now(timezone.utc)
        bodies = ["one", "two", "three", "four"]
        for body in bodies:
            db_session.add(
                ChirpDB(
                    id=str(uuid.uuid4()),
                    body=body,
                    user_id=str(test_user.id),
                    created_at=created_at,
                    updated_at=created_at,
                )
            )
            db_session.flush()
        db_session.commit()

        chirps = chirp_repository.list_all()

        assert [chirp.body for chirp in chirps] == bodies

    def test_timestamps_come_back_as_utc(self, chirp_repository, test_user):
        created = chirp_repository.create("hello", test_user.id)

        assert created.created_at.utcoffset() == timedelta(0)
        assert chirp_repository.get(created.id).updated_at.utcoffset() == timedelta(0)
