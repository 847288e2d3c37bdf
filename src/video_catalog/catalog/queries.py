"""Read operations: filtered listing and single-record lookup."""

from __future__ import annotations

from collections.abc import Mapping

from video_catalog.catalog.errors import NotFoundError
from video_catalog.catalog.filters import build_video_filter
from video_catalog.catalog.pagination import resolve_window, total_pages
from video_catalog.core.identity import parse_video_id
from video_catalog.db import repo
from video_catalog.db.repo import DbSession
from video_catalog.models.domain import VideoEntity, VideoPage


def find_videos(
    session: DbSession, params: Mapping[str, object], max_limit: int | None = None
) -> VideoPage:
    """List videos matching params, one page at a time.

    Args:
        session: Database session.
        params: Raw query parameters (title, actress, genre, rating,
            page, limit). Unusable values are ignored.
        max_limit: Optional cap on the page size.

    Returns:
        VideoPage with the window, total count and page metadata.
    """
    video_filter = build_video_filter(params)
    window = resolve_window(params.get("page"), params.get("limit"), max_limit)

    total = repo.count_videos(session, video_filter)
    videos = repo.list_videos(session, video_filter, offset=window.offset, limit=window.limit)

    return VideoPage(
        videos=videos,
        total_videos=total,
        total_pages=total_pages(total, window.limit),
        current_page=window.page,
    )


def get_video(session: DbSession, raw_id: str) -> VideoEntity:
    """Get one video.

    Raises:
        NotFoundError: If raw_id is malformed or has no record.
    """
    video = repo.get_video(session, parse_video_id(raw_id))
    if video is None:
        raise NotFoundError()
    return video
