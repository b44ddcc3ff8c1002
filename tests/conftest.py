import os

# main builds a module-level app on import; keep it off the disk
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from Auth.security import create_user
from Core.settings import Settings
from main import create_app

ADMIN = {"username": "admin", "password": "admin123"}


def build_app(**overrides):
    values = dict(
        database_url="sqlite://",
        rate_limit_max=10_000,
        login_rate_limit_max=1_000,
        contact_rate_limit_max=1_000,
        log_level="WARNING",
    )
    values.update(overrides)
    app = create_app(Settings(**values))
    with Session(app.state.engine) as s:
        create_user(s, ADMIN["username"], ADMIN["password"])
    return app


def login(client: TestClient) -> TestClient:
    response = client.post("/api/auth/login", json=ADMIN)
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def make_app():
    return build_app


@pytest.fixture
def app():
    return build_app()


@pytest.fixture
def client(app):
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def admin(app):
    """Client holding an admin session cookie."""
    return login(TestClient(app))


@pytest.fixture
def db(app):
    with Session(app.state.engine) as session:
        yield session
