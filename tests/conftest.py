import os

# Settings are read at import time
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT", "10000/minute")
os.environ.setdefault("AUTO_CREATE_DB", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskflow.auth.security import get_password_hash
from taskflow.auth.sessions import MemorySessionStore, get_session_store
from taskflow.db import Base
from taskflow.main import app as application
from taskflow.models import models  # noqa: F401
from taskflow.storage import DatabaseStorageProvider, MemoryStorageProvider, get_storage


ADMIN_PASSWORD = "admin-pass"
VIEWER_PASSWORD = "viewer-pass"


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def storage():
    return MemoryStorageProvider()


@pytest.fixture(params=["memory", "database"])
def any_storage(request, db_session):
    if request.param == "memory":
        return MemoryStorageProvider()
    return DatabaseStorageProvider(db_session)


@pytest.fixture
def session_store():
    return MemorySessionStore()


@pytest.fixture
def app(storage, session_store):
    application.dependency_overrides[get_storage] = lambda: storage
    application.dependency_overrides[get_session_store] = lambda: session_store
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def users(storage):
    storage.upsert_user(
        {
            "id": "u-admin",
            "username": "admin",
            "password_hash": get_password_hash(ADMIN_PASSWORD),
            "email": "admin@company.com",
            "first_name": "Ada",
            "last_name": "Admin",
            "role": "admin",
        }
    )
    storage.upsert_user(
        {
            "id": "u-super",
            "username": "super",
            "password_hash": get_password_hash(ADMIN_PASSWORD),
            "role": "super_admin",
        }
    )
    storage.upsert_user(
        {
            "id": "u-viewer",
            "username": "viewer",
            "password_hash": get_password_hash(VIEWER_PASSWORD),
            "role": "guest",
        }
    )
    return storage


@pytest.fixture
def client(app):
    return TestClient(app)


def login(client: TestClient, username: str, password: str):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def admin_client(app, users):
    c = TestClient(app)
    assert login(c, "admin", ADMIN_PASSWORD).status_code == 200
    return c


@pytest.fixture
def guest_client(app):
    c = TestClient(app)
    assert c.post("/api/auth/guest").status_code == 200
    return c
