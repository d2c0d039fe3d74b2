"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
Each HTTP test uses its own owner_key, so rows from other tests never
leak into its results.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_diary.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from diary_insight.db.base import Base, get_db
from diary_insight.main import app
from diary_insight.services.records import make_record

SQLITE_URL = "sqlite:///./test_diary.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def rec():
    """Factory for journal Records: rec("2024-05-01", 8, entry_id=1, ...)."""
    def _make(day: str, mood=5, **kwargs):
        dims = kwargs.pop("dimensions", {"mood": mood})
        return make_record(owner_key=kwargs.pop("owner_key", "u1"), date=day, dimensions=dims, **kwargs)
    return _make
