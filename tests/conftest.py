"""Shared fixtures: in-memory databases, seeded users and an API client."""

import os
import sys
from datetime import date
from pathlib import Path

# Ensure project root is on sys.path so `import mentormatch` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read at import time; give tests a throwaway configuration.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentormatch.database import Base, get_db
from mentormatch.models.meeting import Meeting, MeetingStatus
from mentormatch.models.user import User, ROLE_MENTEE, ROLE_MENTOR

SLOTS = ["09:00-10:00", "10:00-11:00"]
DAY = date(2024, 6, 1)


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(name="User", role=ROLE_MENTEE, slots=None):
        counter["n"] += 1
        user = User(
            name=name,
            email=f"user{counter['n']}@test.com",
            password_hash="hash",
            role=role,
            skills=[],
            available_time_slots=list(slots or []),
            rating=0.0,
            is_active=True,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def mentor(make_user):
    return make_user(name="Test Mentor", role=ROLE_MENTOR, slots=SLOTS)


@pytest.fixture
def mentee(make_user):
    return make_user(name="Test Mentee")


@pytest.fixture
def make_meeting(db_session):
    def _make(mentor, mentee, day=DAY, slot=SLOTS[0], status=MeetingStatus.PENDING, topic="Career"):
        meeting = Meeting(
            mentor_id=mentor.id,
            mentee_id=mentee.id,
            date=day,
            time_slot=slot,
            topic=topic,
            status=status,
        )
        db_session.add(meeting)
        db_session.commit()
        db_session.refresh(meeting)
        return meeting

    return _make


# ======================
# API CLIENT
# ======================

@pytest.fixture
def api_session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    yield factory

    engine.dispose()


@pytest.fixture
def client(api_session_factory):
    from fastapi.testclient import TestClient

    from mentormatch.main import app

    def _override_get_db():
        db = api_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Register a user through the API and return (user_id, auth headers)."""

    def _register(name, email, password="Password@123"):
        resp = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["userId"]

        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _register
