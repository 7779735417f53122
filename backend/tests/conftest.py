"""Pytest fixtures for the GroupMirror backend.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database (fresh schema per test)
- Auto-create policy settings
- Collaboration groups (created through the ORM, so the triggers fire)
- FastAPI test client bound to the test session

Usage:
    def test_mirror_created(db_session, allow_all_groups, make_group):
        group = make_group(name="Launch")
        assert db_session.query(MirrorGroup).count() == 1
"""

import os
import sys
from pathlib import Path
from typing import Callable, Generator

# Set environment variables BEFORE any imports to ensure they take effect
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("PHOTO_BASE_URL", "https://photos.test")
os.environ.setdefault("FEED_BOT_USER_ID", "005000000000001AAA")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from database import SessionLocal, engine, get_db as database_get_db
from domain.records import USER_KEY_PREFIX, new_record_id
from models.base import Base
from models.collaboration_group import CollaborationGroup, CollaborationType
from models.group_sync_settings import GroupSyncSettings


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    Other sessions in a test (SMTP handler, resync task) share the same
    in-memory database; commit here before handing over to them.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def _set_policy(session: Session, public: bool, private: bool, unlisted: bool) -> GroupSyncSettings:
    row = GroupSyncSettings.get_org_defaults(session) or GroupSyncSettings()
    row.allow_public_groups = public
    row.allow_private_groups = private
    row.allow_unlisted_groups = unlisted
    session.add(row)
    session.commit()
    return row


@pytest.fixture(scope="function")
def set_policy(db_session: Session) -> Callable[..., GroupSyncSettings]:
    """Write the singleton auto-create settings row."""
    def _set(public: bool = False, private: bool = False, unlisted: bool = False):
        return _set_policy(db_session, public, private, unlisted)
    return _set


@pytest.fixture(scope="function")
def allow_all_groups(set_policy) -> GroupSyncSettings:
    """Auto-create mirrors for every collaboration type."""
    return set_policy(public=True, private=True, unlisted=True)


@pytest.fixture(scope="function")
def owner_id() -> str:
    return new_record_id(USER_KEY_PREFIX)


@pytest.fixture(scope="function")
def make_group(db_session: Session, owner_id: str) -> Callable[..., CollaborationGroup]:
    """Create and commit a collaboration group (fires the upsert trigger)."""
    counter = {"n": 0}

    def _make(
        name: str | None = None,
        collaboration_type: CollaborationType = CollaborationType.PUBLIC,
        **fields,
    ) -> CollaborationGroup:
        counter["n"] += 1
        group = CollaborationGroup(
            name=name or f"Group {counter['n']}",
            owner_id=fields.pop("owner_id", owner_id),
            collaboration_type=collaboration_type,
            **fields,
        )
        db_session.add(group)
        db_session.commit()
        return group

    return _make


@pytest.fixture(scope="function")
def client(db_session: Session):
    """Test client whose requests all use the test session."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
