"""
Pytest configuration for the catalog API tests.

Environment is set before the application modules are imported, since
settings are read once at import time.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.auth import get_password_hasher, get_token_service
from core.security import PasswordHasher, TokenService
from database import get_db, init_db
from main import app
from models import Base

TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def client(session_factory, token_service):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_password_hasher] = lambda: PasswordHasher(rounds=4)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# -------------------------------
# Helpers
# -------------------------------

def signup(client, username, password="p1"):
    return client.post("/auth/signup", json={"username": username, "password": password})


def login(client, username, password="p1"):
    return client.post("/auth/login", json={"username": username, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register():
    """Signs a user up and returns their bearer headers."""
    def _register(client, username, password="p1"):
        assert signup(client, username, password).status_code == 201
        res = login(client, username, password)
        assert res.status_code == 200
        return bearer(res.json()["token"])
    return _register


@pytest.fixture
def new_product():
    def _new_product(client, headers, **overrides):
        payload = {
            "productName": "Lamp",
            "imageLink": "https://img.example.com/lamp.png",
            "description": "Desk lamp",
            "price": 19.5,
        }
        payload.update(overrides)
        res = client.post("/auth/addProduct", json=payload, headers=headers)
        assert res.status_code == 201
        return res.json()["product"]
    return _new_product
