"""Domain models for the video catalog.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Principal:
    """Authenticated identity acting on a request.

    Only principal_id is consumed; it is compared against a record's
    created_by.
    """

    principal_id: str


@dataclass
class VideoEntity:
    """Domain model for a video record."""

    video_id: str
    title: str
    video_url: str
    actresses: list[str]
    genres: list[str]
    rating: int
    site: str
    created_at: datetime
    created_by: str | None = None

    @property
    def is_ownerless(self) -> bool:
        return not self.created_by


@dataclass
class VideoPage:
    """One window of a filtered listing."""

    videos: list[VideoEntity] = field(default_factory=list)
    total_videos: int = 0
    total_pages: int = 0
    current_page: int = 1
