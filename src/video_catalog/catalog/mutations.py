"""Create, update and delete for video records.

Inputs arrive already validated. Tag fields are normalized here with
normalize_tags(), so a scalar performer or genre becomes a one-element
list on both create and update.

Update and delete load, authorize, then write. The sequence is not
atomic: a record deleted concurrently between load and write surfaces
as NotFoundError from the repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from video_catalog.catalog.authorization import Operation, ensure_can_mutate
from video_catalog.catalog.errors import BadRequestError, FieldError, NotFoundError
from video_catalog.catalog.tags import normalize_tags
from video_catalog.core.identity import parse_video_id
from video_catalog.db import repo
from video_catalog.db.repo import DbSession
from video_catalog.models.domain import Principal, VideoEntity

logger = logging.getLogger(__name__)

TagValue = str | list[str] | None


@dataclass
class NewVideo:
    """Input for video creation."""

    title: str
    video_url: str
    actress: TagValue
    genre: TagValue
    rating: int
    site: str


@dataclass
class VideoChanges:
    """Input for a partial update. Falsy fields leave the record unchanged."""

    title: str | None = None
    video_url: str | None = None
    actress: TagValue = None
    genre: TagValue = None
    rating: int | None = None
    site: str | None = None


def create_video(session: DbSession, principal: Principal, new_video: NewVideo) -> VideoEntity:
    """Create a video owned by principal.

    Raises:
        BadRequestError: If a tag field normalizes to nothing.
    """
    actresses = normalize_tags(new_video.actress)
    genres = normalize_tags(new_video.genre)

    missing = [
        FieldError(field=name, message="At least one value is required")
        for name, value in (("actress", actresses), ("genre", genres))
        if value is None
    ]
    if missing:
        raise BadRequestError(missing)

    video = repo.create_video(
        session,
        title=new_video.title,
        video_url=new_video.video_url,
        actresses=actresses,
        genres=genres,
        rating=new_video.rating,
        site=new_video.site,
        created_by=principal.principal_id,
    )
    repo.commit(session)

    logger.info(f"Created video {video.video_id} for {principal.principal_id}")
    return video


def apply_changes(video: VideoEntity, changes: VideoChanges) -> VideoEntity:
    """Return a copy of video with truthy fields of changes applied.

    Pure function - no database access. created_by, created_at and
    video_id are carried over untouched.
    """
    actresses = normalize_tags(changes.actress)
    genres = normalize_tags(changes.genre)

    return replace(
        video,
        title=changes.title or video.title,
        video_url=changes.video_url or video.video_url,
        actresses=actresses or list(video.actresses),
        genres=genres or list(video.genres),
        rating=changes.rating or video.rating,
        site=changes.site or video.site,
    )


def _load_for_mutation(session: DbSession, raw_id: str) -> VideoEntity:
    video_id = parse_video_id(raw_id)
    video = repo.get_video(session, video_id)
    if video is None:
        raise NotFoundError()
    return video


def update_video(
    session: DbSession, principal: Principal, raw_id: str, changes: VideoChanges
) -> VideoEntity:
    """Apply a partial update to a video the principal may modify.

    Raises:
        NotFoundError: If raw_id is malformed or has no record.
        ForbiddenError: If principal does not own the record.
    """
    video = _load_for_mutation(session, raw_id)
    ensure_can_mutate(principal, video, Operation.UPDATE)

    updated = repo.update_video(session, apply_changes(video, changes))
    repo.commit(session)

    logger.info(f"Updated video {updated.video_id} by {principal.principal_id}")
    return updated


def delete_video(session: DbSession, principal: Principal, raw_id: str) -> None:
    """Delete a video the principal may modify.

    Raises:
        NotFoundError: If raw_id is malformed or has no record.
        ForbiddenError: If principal does not own the record.
    """
    video = _load_for_mutation(session, raw_id)
    ensure_can_mutate(principal, video, Operation.DELETE)

    if not repo.delete_video(session, video.video_id):
        raise NotFoundError()
    repo.commit(session)

    logger.info(f"Deleted video {video.video_id} by {principal.principal_id}")
