"""Pytest fixtures and configuration for Chirpy tests."""

import pytest
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from chirpy.auth.passwords import hash_password
from chirpy.config import Settings
from chirpy.database.database import Base, build_engine, init_db
from chirpy.database.chirp_repository import ChirpRepository
from chirpy.database.user_repository import UserRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "pw1"


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite engine (foreign keys on), created fresh for each test."""
    # StaticPool keeps the single in-memory connection alive across sessions and threads.
    engine = build_engine(Settings(database_url=TEST_DATABASE_URL), poolclass=StaticPool)
    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def chirp_repository(db_session: Session):
    """Create a ChirpRepository instance for testing."""
    return ChirpRepository(db_session)


@pytest.fixture
def test_user(user_repository):
    """A stored user whose password is TEST_PASSWORD."""
    return user_repository.create("test@example.com", hash_password(TEST_PASSWORD))


@pytest.fixture
def static_dir(tmp_path):
    """Directory served under /app."""
    root = tmp_path / "static"
    root.mkdir()
    (root / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>", encoding="utf-8")
    assets = root / "assets"
    assets.mkdir()
    (assets / "logo.txt").write_text("chirpy logo", encoding="utf-8")
    return root


@pytest.fixture
def test_settings(static_dir):
    """Settings for a dev-platform app serving `static_dir`."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        platform="dev",
        fileserver_root=str(static_dir),
    )


@pytest.fixture
def make_client(db_engine, db_session: Session):
    """Factory for test clients built from arbitrary settings, sharing the test database."""
    from chirpy.api.app import create_app
    from chirpy.database.database import get_db

    clients = []

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    def _make(settings: Settings) -> TestClient:
        app = create_app(settings=settings, engine=db_engine)
        app.dependency_overrides[get_db] = override_get_db
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.app.dependency_overrides.clear()
        client.close()


@pytest.fixture
def test_client(make_client, test_settings):
    """Create a FastAPI test client with overridden database dependency."""
    return make_client(test_settings)
