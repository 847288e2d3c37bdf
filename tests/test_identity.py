"""Tests for record identity utilities."""

import uuid

import pytest

from video_catalog.catalog.errors import MalformedIdentifierError, NotFoundError
from video_catalog.core.identity import new_video_id, parse_video_id


class TestNewVideoId:
    """Tests for id generation."""

    def test_format(self):
        """Ids are 32 lowercase hex characters."""
        video_id = new_video_id()
        assert len(video_id) == 32
        assert video_id == video_id.lower()
        int(video_id, 16)

    def test_unique(self):
        assert len({new_video_id() for _ in range(100)}) == 100


class TestParseVideoId:
    """Tests for id parsing."""

    def test_canonical_passthrough(self):
        video_id = new_video_id()
        assert parse_video_id(video_id) == video_id

    def test_hyphenated_form(self):
        value = uuid.uuid4()
        assert parse_video_id(str(value)) == value.hex

    def test_upper_case(self):
        value = uuid.uuid4()
        assert parse_video_id(str(value).upper()) == value.hex

    @pytest.mark.parametrize("raw", ["", "   ", "123", "not-an-id", "z" * 32])
    def test_malformed(self, raw):
        with pytest.raises(MalformedIdentifierError):
            parse_video_id(raw)

    def test_malformed_is_not_found(self):
        """Malformed ids are reported through the not-found kind."""
        with pytest.raises(NotFoundError):
            parse_video_id("bogus")
