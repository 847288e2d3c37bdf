"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping catalog logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session

from video_catalog.catalog.errors import NotFoundError
from video_catalog.catalog.filters import LIKE_ESCAPE, VideoFilter
from video_catalog.core.identity import new_video_id
from video_catalog.db.schema import TAG_GENRE, TAG_PERFORMER, Video, VideoTag
from video_catalog.models.domain import VideoEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _tag_values(video: Video, kind: str) -> list[str]:
    return [t.value for t in sorted(video.tags, key=lambda t: t.position) if t.kind == kind]


def _video_to_entity(video: Video) -> VideoEntity:
    """Convert SQLAlchemy Video to domain entity."""
    return VideoEntity(
        video_id=video.video_id,
        title=video.title,
        video_url=video.video_url,
        actresses=_tag_values(video, TAG_PERFORMER),
        genres=_tag_values(video, TAG_GENRE),
        rating=video.rating,
        site=video.site,
        created_by=video.created_by,
        created_at=_as_utc(video.created_at),
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _build_tags(existing: list[VideoTag], actresses: list[str], genres: list[str]) -> list[VideoTag]:
    """Build the tag collection, reusing rows whose (kind, value) survive.

    Reusing rows keeps UNIQUE(video_id, kind, value) intact during flush,
    since orphan deletes are emitted after inserts.
    """
    by_key = {(t.kind, t.value): t for t in existing}
    tags: list[VideoTag] = []
    for kind, values in ((TAG_PERFORMER, actresses), (TAG_GENRE, genres)):
        for position, value in enumerate(values):
            tag = by_key.pop((kind, value), None)
            if tag is None:
                tag = VideoTag(kind=kind, value=value)
            tag.position = position
            tags.append(tag)
    return tags


# ============================================================================
# Query Helpers
# ============================================================================


def _tags_match(kind: str, patterns: tuple[str, ...]):
    """EXISTS clause: any tag of kind matches any of patterns."""
    return Video.tags.any(
        and_(
            VideoTag.kind == kind,
            or_(*[VideoTag.value_folded.like(p, escape=LIKE_ESCAPE) for p in patterns]),
        )
    )


def _filtered_query(session: DbSession, video_filter: VideoFilter) -> Query:
    query = session.query(Video)

    if video_filter.title_pattern is not None:
        query = query.filter(
            Video.title_folded.like(video_filter.title_pattern, escape=LIKE_ESCAPE)
        )
    if video_filter.actress_patterns:
        query = query.filter(_tags_match(TAG_PERFORMER, video_filter.actress_patterns))
    if video_filter.genre_patterns:
        query = query.filter(_tags_match(TAG_GENRE, video_filter.genre_patterns))
    if video_filter.min_rating is not None:
        query = query.filter(Video.rating >= video_filter.min_rating)

    return query


# ============================================================================
# Video Repository
# ============================================================================


def get_video(session: DbSession, video_id: str) -> VideoEntity | None:
    """Get video by ID."""
    video = session.query(Video).filter(Video.video_id == video_id).first()
    return _video_to_entity(video) if video else None


def count_videos(session: DbSession, video_filter: VideoFilter) -> int:
    """Count videos matching a filter."""
    return _filtered_query(session, video_filter).count()


def list_videos(
    session: DbSession, video_filter: VideoFilter, *, offset: int, limit: int
) -> list[VideoEntity]:
    """Get one window of matching videos, newest first."""
    videos = (
        _filtered_query(session, video_filter)
        .order_by(Video.created_at.desc(), Video.video_id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [_video_to_entity(v) for v in videos]


def create_video(
    session: DbSession,
    *,
    title: str,
    video_url: str,
    actresses: list[str],
    genres: list[str],
    rating: int,
    site: str,
    created_by: str | None,
) -> VideoEntity:
    """Insert a new video. The store assigns video_id and created_at."""
    video = Video(
        video_id=new_video_id(),
        title=title,
        video_url=video_url,
        rating=rating,
        site=site,
        created_by=created_by,
        created_at=datetime.now(timezone.utc),
    )
    video.tags = _build_tags([], actresses, genres)
    session.add(video)
    session.flush()
    return _video_to_entity(video)


def update_video(session: DbSession, entity: VideoEntity) -> VideoEntity:
    """Write mutable fields of entity back to its row.

    created_by and created_at are never written.

    Raises:
        NotFoundError: If the row no longer exists.
    """
    video = session.query(Video).filter(Video.video_id == entity.video_id).first()
    if video is None:
        raise NotFoundError()

    video.title = entity.title
    video.video_url = entity.video_url
    video.rating = entity.rating
    video.site = entity.site
    video.tags = _build_tags(list(video.tags), entity.actresses, entity.genres)
    session.flush()
    return _video_to_entity(video)


def delete_video(session: DbSession, video_id: str) -> bool:
    """Delete a video and its tags. Returns False if it did not exist."""
    video = session.query(Video).filter(Video.video_id == video_id).first()
    if video is None:
        return False
    session.delete(video)
    session.flush()
    return True


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()
