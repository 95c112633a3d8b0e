"""Shared fixtures for the notification test-suite."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from rating_notifications.domain.entities import Notification
from rating_notifications.infrastructure.database import build_engine, initialize_database
from rating_notifications.infrastructure.models import (
    ProfileModel,
    RatingCommentModel,
    RatingModel,
)

PROFILES = {
    "alice": "Alice",
    "bob": "Bob",
    "carol": "Carol",
    "dave": "Dave",
}

# Rating 1 belongs to bob and already has comments from carol and dave.
BOB_RATING_ID = 1
ALICE_RATING_ID = 2


class RecordingPublisher:
    """Publisher double that remembers every dispatched notification."""

    def __init__(self) -> None:
        self.dispatched: list[Notification] = []

    def dispatch(self, notification: Notification) -> int:
        self.dispatched.append(notification)
        return 1


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Session:
    db = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield db
    finally:
        db.close()


def seed_social_graph(db: Session) -> None:
    """Insert the profiles, ratings and comments the scenarios rely on."""

    for profile_id, display_name in PROFILES.items():
        db.add(
            ProfileModel(
                id=profile_id,
                display_name=display_name,
                avatar_url=f"https://cdn.example.com/{profile_id}.png",
            )
        )
    db.add(RatingModel(id=BOB_RATING_ID, profile_id="bob"))
    db.add(RatingModel(id=ALICE_RATING_ID, profile_id="alice"))
    db.add(RatingCommentModel(id="c-carol", rating_id=BOB_RATING_ID, profile_id="carol"))
    db.add(RatingCommentModel(id="c-dave", rating_id=BOB_RATING_ID, profile_id="dave"))
    db.commit()


@pytest.fixture()
def seeded_session(session) -> Session:
    seed_social_graph(session)
    return session


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def anyio_backend():
    return "asyncio"


def _seeded_session_factory(engine) -> sessionmaker:
    initialize_database(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = factory()
    try:
        seed_social_graph(db)
    finally:
        db.close()
    return factory


@contextmanager
def _api_client(session_factory: sessionmaker):
    from fastapi.testclient import TestClient

    from main import create_app
    from rating_notifications.infrastructure.database import get_db, get_session_factory

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def api_session_factory(tmp_path):
    """Session factory backed by a file database shared across threads."""

    engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    yield _seeded_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def client(api_session_factory):
    """Return a test client whose requests use the seeded test database."""

    with _api_client(api_session_factory) as test_client:
        yield test_client


@pytest.fixture()
def single_connection_client(tmp_path):
    """Test client whose database pool holds exactly one connection."""

    engine = create_engine(
        f"sqlite:///{tmp_path / 'notifications.db'}",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=0,
        pool_timeout=1,
    )
    with _api_client(_seeded_session_factory(engine)) as test_client:
        yield test_client
    engine.dispose()


@pytest.fixture()
def auth_headers():
    """Build bearer headers for a profile id."""

    from rating_notifications.infrastructure.security import create_access_token

    def _headers(profile_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(profile_id)}"}

    return _headers
