"""Shared pytest fixtures for video catalog tests."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from video_catalog.api.auth import TokenVerifier
from video_catalog.config import Settings
from video_catalog.db.schema import TAG_GENRE, TAG_PERFORMER, Base, Video, VideoTag
from video_catalog.db.session import Database

TEST_SECRET = "test-secret"
BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def settings():
    """Settings for an isolated test app."""
    return Settings(
        database_url="sqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        debug=False,
    )


@pytest.fixture
def database(settings):
    """Initialized in-memory Database."""
    db = Database(settings.database_url)
    db.init()
    yield db
    db.dispose()


@pytest.fixture
def client(settings, database):
    """TestClient for an app backed by the test database."""
    from video_catalog.api.app import create_app

    app = create_app(settings=settings, database=database)
    return TestClient(app)


@pytest.fixture
def verifier():
    """TokenVerifier sharing the test app's secret."""
    return TokenVerifier(TEST_SECRET)


@pytest.fixture
def auth_header(verifier):
    """Build an Authorization header for a principal id."""

    def _header(principal_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {verifier.issue(principal_id)}"}

    return _header


def add_video(
    session,
    video_id: str,
    *,
    title: str = "Sample",
    actresses: tuple[str, ...] = ("Ann",),
    genres: tuple[str, ...] = ("Drama",),
    rating: int = 3,
    site: str = "s1",
    created_by: str | None = "owner-1",
    minutes: int = 0,
) -> Video:
    """Insert a video row directly, created BASE_TIME + minutes."""
    video = Video(
        video_id=video_id,
        title=title,
        video_url="http://x.test/v",
        rating=rating,
        site=site,
        created_by=created_by,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    video.tags = [
        VideoTag(kind=TAG_PERFORMER, value=a, position=i) for i, a in enumerate(actresses)
    ] + [VideoTag(kind=TAG_GENRE, value=g, position=i) for i, g in enumerate(genres)]
    session.add(video)
    session.commit()
    return video


@pytest.fixture
def make_video():
    """Expose add_video to tests."""
    return add_video
