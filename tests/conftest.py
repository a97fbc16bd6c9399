# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from task_api.database import Base, get_db
from task_api.main import app
from task_api import models  # noqa: F401


# ============================================================
# DATABASE (in-memory SQLite shared across threads)
# ============================================================

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture(autouse=True)
def clean_db():
    """Recreate the schema before each test so tests never see each other's rows."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def broken_client():
    """Client whose database has no tasks table, so every statement fails."""
    empty_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    EmptySession = sessionmaker(autocommit=False, autoflush=False, bind=empty_engine)

    def override_empty_db():
        db = EmptySession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_empty_db
    yield TestClient(app)
    empty_engine.dispose()
