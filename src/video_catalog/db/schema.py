"""Database schema for the video catalog.

Performers and genres are ordered tag lists stored in a child table so
that filters can match against individual elements.

Titles and tag values carry a casefolded copy, kept in step by the
validators below, so substring filters ignore case for any script and
not just ASCII.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

TAG_PERFORMER = "performer"
TAG_GENRE = "genre"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Video(Base):
    """A catalogued video.

    Invariant: 1 <= rating <= 5
    created_by is nullable for legacy owner-less records.
    """

    __tablename__ = "videos"

    video_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    title_folded: Mapped[str] = mapped_column(String(1024), nullable=False, index=True)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    site: Mapped[str] = mapped_column(String(256), nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )

    tags: Mapped[list["VideoTag"]] = relationship(
        back_populates="video",
        cascade="all, delete-orphan",
        order_by="VideoTag.position",
        lazy="selectin",
    )

    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_video_rating"),)

    @validates("title")
    def _fold_title(self, _key: str, value: str) -> str:
        self.title_folded = value.casefold()
        return value


class VideoTag(Base):
    """A performer or genre tag attached to a video.

    Invariant: UNIQUE(video_id, kind, value)
    Tags of one kind form an ordered set (by position).
    """

    __tablename__ = "video_tags"

    tag_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("videos.video_id", ondelete="CASCADE"), nullable=False
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    value: Mapped[str] = mapped_column(String(256), nullable=False)
    value_folded: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    video: Mapped[Video] = relationship(back_populates="tags")

    __table_args__ = (
        UniqueConstraint("video_id", "kind", "value", name="uq_video_tag"),
    )

    @validates("value")
    def _fold_value(self, _key: str, value: str) -> str:
        self.value_folded = value.casefold()
        return value
