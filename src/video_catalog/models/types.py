"""Pydantic models for the catalog API.

Request bodies carry the field-level validation; anything reaching the
catalog core has already passed these checks.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from video_catalog.catalog.tags import normalize_tags

URL_PATTERN = re.compile(
    r"^(https?://)?([\w-]+\.)+[\w-]+(/[\w\-._~:/?#\[\]@!$&'()*+,;=]*)?$"
)

TagInput = str | list[str]


def _check_url(value: str) -> str:
    value = value.strip()
    if not URL_PATTERN.match(value):
        raise ValueError("Please provide a valid URL")
    return value


class VideoCreate(BaseModel):
    """Body of POST /videos. All fields required."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    video_url: str = Field(alias="videoUrl")
    actress: TagInput
    genre: TagInput
    rating: int = Field(ge=1, le=5)
    site: str

    @field_validator("title", "site")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field is required")
        return value

    @field_validator("video_url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        return _check_url(value)

    @field_validator("actress", "genre")
    @classmethod
    def _at_least_one(cls, value: TagInput) -> TagInput:
        if normalize_tags(value) is None:
            raise ValueError("At least one value is required")
        return value


class VideoUpdate(BaseModel):
    """Body of PUT /videos/{id}. Absent or empty fields keep their value."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    video_url: str | None = Field(default=None, alias="videoUrl")
    actress: TagInput | None = None
    genre: TagInput | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    site: str | None = None

    @field_validator("title", "site")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @field_validator("video_url")
    @classmethod
    def _valid_url(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return _check_url(value)


class VideoDetail(BaseModel):
    """A video record as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    video_url: str = Field(alias="videoUrl")
    actress: list[str]
    genre: list[str]
    rating: int
    site: str
    created_by: str | None = Field(default=None, alias="createdBy")
    created_at: datetime = Field(alias="createdAt")


class VideoListResponse(BaseModel):
    """Response for GET /videos."""

    model_config = ConfigDict(populate_by_name=True)

    videos: list[VideoDetail]
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")
    total_videos: int = Field(alias="totalVideos")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
