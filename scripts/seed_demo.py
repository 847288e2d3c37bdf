#!/usr/bin/env python3
"""Seed a demo catalog.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the database named by VIDEO_CATALOG_DATABASE_URL
2. Creates demo videos owned by a demo principal
3. Adds one owner-less legacy record
4. Prints a bearer token for the demo principal
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from video_catalog.api.auth import TokenVerifier  # noqa: E402
from video_catalog.catalog.mutations import NewVideo, create_video  # noqa: E402
from video_catalog.config import Settings  # noqa: E402
from video_catalog.core.identity import new_video_id  # noqa: E402
from video_catalog.db.schema import TAG_GENRE, TAG_PERFORMER, Video, VideoTag  # noqa: E402
from video_catalog.db.session import Database  # noqa: E402
from video_catalog.models.domain import Principal  # noqa: E402

DEMO_PRINCIPAL = Principal("demo-user")

DEMO_VIDEOS = [
    NewVideo("Night Train", "https://videos.example.com/night-train", ["Ann Lee"], ["Drama"], 4, "example"),
    NewVideo("Morning Light", "https://videos.example.com/morning", ["Bea Cruz", "Ann Lee"], ["Comedy"], 3, "example"),
    NewVideo("Deep Water", "https://videos.example.com/deep-water", "Cy Park", "Thriller", 5, "example"),
]


def seed_legacy_video(database: Database) -> str:
    """Insert a record without an owner, as older data may have."""
    with database.session_scope() as session:
        video = Video(
            video_id=new_video_id(),
            title="Legacy Import",
            video_url="https://videos.example.com/legacy",
            rating=2,
            site="archive",
            created_by=None,
            created_at=datetime.now(timezone.utc),
        )
        video.tags = [
            VideoTag(kind=TAG_PERFORMER, value="Unknown", position=0),
            VideoTag(kind=TAG_GENRE, value="Documentary", position=0),
        ]
        session.add(video)
        return video.video_id


def main() -> int:
    """Main entry point."""
    settings = Settings.from_env()
    database = Database(settings.database_url)
    database.init()

    print("=" * 60)
    print("Video Catalog Demo Seeding Script")
    print("=" * 60)

    try:
        session = database.session()
        try:
            for new_video in DEMO_VIDEOS:
                video = create_video(session, DEMO_PRINCIPAL, new_video)
                print(f"  Created: {video.title} ({video.video_id})")
        finally:
            session.close()

        legacy_id = seed_legacy_video(database)
        print(f"  Created owner-less: Legacy Import ({legacy_id})")
    finally:
        database.dispose()

    token = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm).issue(
        DEMO_PRINCIPAL.principal_id
    )
    print("\nDemo principal token:")
    print(f"  Authorization: Bearer {token}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
