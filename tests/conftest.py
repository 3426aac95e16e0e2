"""
Shared fixtures: in-memory database, services and an API client.
"""
import pytest
from fastapi.testclient import TestClient

from vibely.core.config import Settings
from vibely.core.locks import PairLockRegistry
from vibely.core.security import create_access_token, get_password_hash
from vibely.database import Database
from vibely.main import create_app
from vibely.repositories import UserRepository
from vibely.services.friendship_service import FriendshipService

TEST_PASSWORD = "secret123"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        RATE_LIMIT_ENABLED=False,
        STREAM_API_KEY="",
        STREAM_API_SECRET="",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    database = Database.from_settings(settings)
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def locks():
    return PairLockRegistry()


@pytest.fixture
def friendship_service(db_session, locks):
    return FriendshipService(db_session, locks)


@pytest.fixture
def password_hash():
    # bcrypt is slow; hash once per test
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def make_user(db_session, password_hash):
    """Create and commit a user; onboarded unless told otherwise"""
    counter = {"n": 0}

    def _make_user(name=None, onboarded=True, **profile):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        repo = UserRepository(db_session)
        user = repo.create(
            email=f"{name.lower().replace(' ', '.')}@example.com",
            password_hash=password_hash,
            full_name=name,
            profile_pic=profile.get("profile_pic", ""),
        )
        repo.update(
            user,
            {
                "is_onboarded": onboarded,
                "native_language": profile.get("native_language", "english"),
                "learning_language": profile.get("learning_language", "spanish"),
                "bio": profile.get("bio", ""),
                "location": profile.get("location", ""),
            },
            allow={"is_onboarded"},
        )
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(settings):
    """Bearer header for a user"""
    def _auth_headers(user):
        token = create_access_token(settings, str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
