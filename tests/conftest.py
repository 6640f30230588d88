"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

# Must be set before the app modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.gettempdir(), "tripwell-tests", "api.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from models.Traveler import Traveler


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Fresh in-memory SQLite database for each test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session: Session) -> TestClient:
    """TestClient whose requests share the test's session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_traveler(db_session: Session):
    def _make(first_name="Test", last_name="Traveler", email=None, photo_url=None):
        traveler = Traveler(
            firebase_id=f"fb-{uuid.uuid4().hex[:12]}",
            email=email,
            first_name=first_name,
            last_name=last_name,
            photo_url=photo_url,
        )
        db_session.add(traveler)
        db_session.commit()
        db_session.refresh(traveler)
        return traveler

    return _make
