"""Pytest configuration and fixtures."""

import os

import pytest
from sqlalchemy.engine.url import make_url

# Postboard tests run against a dedicated postboard_test database when DATABASE_URL
# points at Postgres, and against a throwaway SQLite file otherwise
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = (
        make_url(os.environ["DATABASE_URL"])
        .set(database="postboard_test")
        .render_as_string(hide_password=False)
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

# The application engine is built at import time, so point it at the test database first
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from postboard import models  # noqa: E402, F401
from postboard.database import Base, get_db  # noqa: E402
from postboard.main import app  # noqa: E402

API = "/api/v1"


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create the users, tokens and posts tables once per session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Session shared by the test and the app; rows are wiped afterwards."""
    session = TestingSessionLocal()

    yield session

    # Posts and tokens go before the users they reference
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """TestClient whose requests use the test session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Return a helper that signs up a user and returns auth headers."""

    def _register(
        name: str = "Test User",
        email: str = "test@example.com",
        password: str = "testpass123",
    ) -> AuthHeaders:
        response = client.post(
            f"{API}/signup",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password,
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        token = data["token"]
        return AuthHeaders(
            {"Authorization": f"Bearer {token}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
            token=token,
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Create a user and return auth headers with user info."""
    return register()


@pytest.fixture
def other_auth_headers(register):
    """A second, unrelated user."""
    return register(name="Other User", email="other@example.com", password="otherpass123")
