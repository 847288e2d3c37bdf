"""Ownership checks for mutating operations.

Rules, in order:
1. A missing record is reported as not found before the guard runs.
2. Owner-less records (created_by unset) may be updated or deleted by
   any authenticated principal. Each such mutation is logged.
3. Otherwise only the owner may update or delete.

The guard never changes state.
"""

from __future__ import annotations

import logging
from enum import Enum

from video_catalog.catalog.errors import ForbiddenError
from video_catalog.models.domain import Principal, VideoEntity

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def can_mutate(principal: Principal, video: VideoEntity, operation: Operation) -> Decision:
    """Decide whether principal may apply operation to video."""
    if video.is_ownerless:
        logger.warning(
            f"Allowing {operation.value} of owner-less video {video.video_id} "
            f"by {principal.principal_id}"
        )
        return Decision.ALLOW

    if str(video.created_by) == str(principal.principal_id):
        return Decision.ALLOW

    return Decision.DENY


def ensure_can_mutate(principal: Principal, video: VideoEntity, operation: Operation) -> None:
    """Raise ForbiddenError unless principal may apply operation to video."""
    if can_mutate(principal, video, operation) is Decision.DENY:
        logger.warning(
            f"Denied {operation.value} of video {video.video_id}: "
            f"owner={video.created_by} principal={principal.principal_id}"
        )
        raise ForbiddenError(f"Not authorized to {operation.value} this video")
