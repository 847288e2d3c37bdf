"""Tests for ownership checks on mutating operations."""

from datetime import datetime

import pytest

from video_catalog.catalog.authorization import (
    Decision,
    Operation,
    can_mutate,
    ensure_can_mutate,
)
from video_catalog.catalog.errors import ForbiddenError
from video_catalog.models.domain import Principal, VideoEntity


def make_entity(created_by: str | None) -> VideoEntity:
    return VideoEntity(
        video_id="a" * 32,
        title="A",
        video_url="http://x.test/v",
        actresses=["Ann"],
        genres=["Drama"],
        rating=4,
        site="s1",
        created_at=datetime(2024, 1, 1),
        created_by=created_by,
    )


OWNER = Principal("p1")
OTHER = Principal("p2")


class TestCanMutate:
    """Test the allow/deny decision."""

    @pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
    def test_owner_allowed(self, operation):
        assert can_mutate(OWNER, make_entity("p1"), operation) is Decision.ALLOW

    @pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
    def test_other_denied(self, operation):
        assert can_mutate(OTHER, make_entity("p1"), operation) is Decision.DENY

    @pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
    def test_ownerless_allowed(self, operation):
        """Owner-less records may be mutated by any principal."""
        assert can_mutate(OTHER, make_entity(None), operation) is Decision.ALLOW

    def test_empty_owner_treated_as_ownerless(self):
        assert can_mutate(OTHER, make_entity(""), Operation.DELETE) is Decision.ALLOW

    def test_does_not_mutate_record(self):
        """The guard has no side effects on the record."""
        video = make_entity("p1")
        can_mutate(OTHER, video, Operation.UPDATE)
        assert video == make_entity("p1")


class TestEnsureCanMutate:
    """Test the raising variant."""

    def test_owner_passes(self):
        ensure_can_mutate(OWNER, make_entity("p1"), Operation.UPDATE)

    def test_update_denied_message(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_mutate(OTHER, make_entity("p1"), Operation.UPDATE)
        assert exc_info.value.message == "Not authorized to update this video"
        assert exc_info.value.status_code == 403

    def test_delete_denied_message(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_mutate(OTHER, make_entity("p1"), Operation.DELETE)
        assert exc_info.value.message == "Not authorized to delete this video"
