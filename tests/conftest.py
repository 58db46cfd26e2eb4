"""Shared fixtures: a throwaway SQLite database per test and an app wired to it."""
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from todo_api.core.config import Settings
from todo_api.core.security import hash_password
from todo_api.db.config import create_db_engine
from todo_api.db.init import init_db
from todo_api.main import create_app
from todo_api.models.user import User

PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        environment="test",
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def users(session):
    """Two account rows, alice and bob, inserted directly."""
    password_hash = hash_password(PASSWORD, rounds=4)
    alice = User(email="alice@example.com", password_hash=password_hash, name="Alice")
    bob = User(email="bob@example.com", password_hash=password_hash, name="Bob")
    session.add(alice)
    session.add(bob)
    session.commit()
    session.refresh(alice)
    session.refresh(bob)
    return alice, bob


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def signup_and_login(client, email="alice@example.com", password=PASSWORD, name="Alice"):
    """Register through the API and return auth headers for the new account."""
    response = client.post("/api/auth/signup", json={"email": email, "password": password, "name": name})
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice_headers(client):
    return signup_and_login(client)


@pytest.fixture
def bob_headers(client):
    return signup_and_login(client, email="bob@example.com", name="Bob")
