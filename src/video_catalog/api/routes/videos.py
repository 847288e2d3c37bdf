"""Videos API endpoint.

GET /api/videos - List videos with filters and pagination
GET /api/videos/{video_id} - Get video detail
POST /api/videos - Create video (authenticated)
PUT /api/videos/{video_id} - Partially update own video (authenticated)
DELETE /api/videos/{video_id} - Delete own video (authenticated)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from video_catalog.api.app import get_db_session, get_settings
from video_catalog.api.auth import get_current_principal
from video_catalog.catalog import mutations, queries
from video_catalog.catalog.mutations import NewVideo, VideoChanges
from video_catalog.config import Settings
from video_catalog.db.repo import DbSession
from video_catalog.models.domain import Principal, VideoEntity
from video_catalog.models.types import (
    MessageResponse,
    VideoCreate,
    VideoDetail,
    VideoListResponse,
    VideoUpdate,
)

router = APIRouter(tags=["videos"])


def _video_to_detail(video: VideoEntity) -> VideoDetail:
    """Convert VideoEntity to VideoDetail."""
    return VideoDetail(
        id=video.video_id,
        title=video.title,
        video_url=video.video_url,
        actress=video.actresses,
        genre=video.genres,
        rating=video.rating,
        site=video.site,
        created_by=video.created_by,
        created_at=video.created_at,
    )


@router.get("/videos", response_model=VideoListResponse)
def list_videos(
    title: str | None = Query(default=None),
    actress: str | None = Query(default=None),
    genre: str | None = Query(default=None),
    rating: str | None = Query(default=None),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    session: DbSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> VideoListResponse:
    """List videos matching the filters, newest first.

    All parameters are optional strings. actress and genre take
    comma-separated alternatives; rating is a minimum. Unparseable rating,
    page or limit values are ignored rather than rejected.
    """
    params = {
        "title": title,
        "actress": actress,
        "genre": genre,
        "rating": rating,
        "page": page,
        "limit": limit,
    }
    result = queries.find_videos(session, params, max_limit=settings.max_page_limit)

    return VideoListResponse(
        videos=[_video_to_detail(v) for v in result.videos],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total_videos=result.total_videos,
    )


@router.get("/videos/{video_id}", response_model=VideoDetail)
def get_video(
    video_id: str,
    session: DbSession = Depends(get_db_session),
) -> VideoDetail:
    """Get video detail.

    Raises:
        NotFoundError: 404 if video not found or the id is malformed.
    """
    return _video_to_detail(queries.get_video(session, video_id))


@router.post("/videos", response_model=VideoDetail, status_code=201)
def create_video(
    body: VideoCreate,
    principal: Principal = Depends(get_current_principal),
    session: DbSession = Depends(get_db_session),
) -> VideoDetail:
    """Create a video owned by the caller."""
    new_video = NewVideo(
        title=body.title,
        video_url=body.video_url,
        actress=body.actress,
        genre=body.genre,
        rating=body.rating,
        site=body.site,
    )
    return _video_to_detail(mutations.create_video(session, principal, new_video))


@router.put("/videos/{video_id}", response_model=VideoDetail)
def update_video(
    video_id: str,
    body: VideoUpdate,
    principal: Principal = Depends(get_current_principal),
    session: DbSession = Depends(get_db_session),
) -> VideoDetail:
    """Partially update a video.

    Raises:
        NotFoundError: 404 if video not found.
        ForbiddenError: 403 if the caller does not own the video.
    """
    changes = VideoChanges(
        title=body.title,
        video_url=body.video_url,
        actress=body.actress,
        genre=body.genre,
        rating=body.rating,
        site=body.site,
    )
    return _video_to_detail(mutations.update_video(session, principal, video_id, changes))


@router.delete("/videos/{video_id}", response_model=MessageResponse)
def delete_video(
    video_id: str,
    principal: Principal = Depends(get_current_principal),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete a video.

    Raises:
        NotFoundError: 404 if video not found.
        ForbiddenError: 403 if the caller does not own the video.
    """
    mutations.delete_video(session, principal, video_id)
    return MessageResponse(message="Video removed")
