"""
conftest.py
-----------
Shared pytest fixtures for mediameta tests.

Provides fixtures for:
- Database setup and teardown
- Entity managers bound to the test session
- Record and label factories
- Captured vocabulary events
"""
import pytest
from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory

from mediameta.database.models import MediaRecord, Provenance
from mediameta.dataclasses import ClassifierLabel, ResolvedLocation


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Sample Data Factories -----

def _make_record(
    taken_src=Provenance.META,
    taken_at=datetime(2021, 7, 4, 12, 0, 0),
    taken_at_local=None,
    **kwargs,
):
    """Factory for transient records with a known capture time."""
    return MediaRecord(
        taken_at=taken_at,
        taken_at_local=taken_at_local or taken_at,
        taken_src=taken_src,
        **kwargs,
    )


def _dog(uncertainty=10, priority=2, **kwargs):
    """Factory for a usable 'dog' classifier label."""
    return ClassifierLabel("dog", uncertainty=uncertainty, priority=priority, **kwargs)


def _berlin(**kwargs):
    """Factory for a location resolved to Berlin."""
    values = {"city": "Berlin", "state": "Berlin", "country_code": "de", "country_name": "Germany"}
    values.update(kwargs)
    return ResolvedLocation(**values)


@pytest.fixture
def make_record():
    """Factory for transient records with a known capture time."""
    return _make_record


@pytest.fixture
def dog():
    """Factory for a usable 'dog' classifier label."""
    return _dog


@pytest.fixture
def berlin():
    """Factory for a location resolved to Berlin."""
    return _berlin


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a MediaMetaDB instance with an initialized schema.
    Database is torn down after the test.
    """
    from mediameta.database.manager import MediaMetaDB

    db = MediaMetaDB(test_db_path)
    db.initialize_schema()

    yield db

    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Managers are bound to this session through test_db.media,
    test_db.keywords and test_db.labels.
    """
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def media_manager(test_db, db_session):
    """MediaManager bound to the test session."""
    return test_db.media


@pytest.fixture
def keyword_manager(test_db, db_session):
    """KeywordManager bound to the test session."""
    return test_db.keywords


@pytest.fixture
def label_manager(test_db, db_session):
    """LabelManager bound to the test session."""
    return test_db.labels


@pytest.fixture
def stored_record(media_manager):
    """A persisted record with empty details."""
    return media_manager.create({"uid": "m-test-0001"})


@pytest.fixture
def captured_events(test_db):
    """List of (topic, data) published on the database event hub."""
    from mediameta.core.events import TOPIC_COUNT_LABELS, TOPIC_LABELS_CREATED

    events = []

    def collect(topic, data):
        events.append((topic, data))

    test_db.event_hub.subscribe(TOPIC_LABELS_CREATED, collect)
    test_db.event_hub.subscribe(TOPIC_COUNT_LABELS, collect)
    return events
