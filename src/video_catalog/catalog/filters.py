"""Query filter construction for video listings.

Turns loosely-typed, optional query parameters into a VideoFilter: a set
of LIKE patterns and bounds that the repository applies as predicates.

Every client value is escaped before it is placed in a pattern, so "%",
"_" and the escape character itself match literally. Malformed optional
input never raises; it simply contributes no predicate.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

LIKE_ESCAPE = "\\"

# Signed 64-bit range of the store's INTEGER type
SQL_INT_MIN = -(2**63)
SQL_INT_MAX = 2**63 - 1


@dataclass(frozen=True)
class VideoFilter:
    """Predicate set for a video query.

    All patterns are substring patterns over casefolded text with
    LIKE_ESCAPE as the escape character, matched against the casefolded
    copies the store keeps. Empty tuples / None mean unconstrained.

    Attributes:
        title_pattern: Pattern matched against the title.
        actress_patterns: Alternatives; a record matches if any pattern
            matches any of its performers.
        genre_patterns: Alternatives matched against genres the same way.
        min_rating: Inclusive lower bound on rating.
    """

    title_pattern: str | None = None
    actress_patterns: tuple[str, ...] = field(default_factory=tuple)
    genre_patterns: tuple[str, ...] = field(default_factory=tuple)
    min_rating: int | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.title_pattern is None
            and not self.actress_patterns
            and not self.genre_patterns
            and self.min_rating is None
        )


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so value matches literally.

    Examples:
        >>> escape_like("100%_done")
        '100\\\\%\\\\_done'
    """
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(value: str) -> str:
    """Build a casefolded substring pattern for a literal value."""
    return f"%{escape_like(value.casefold())}%"


def split_alternatives(raw: str | None) -> list[str]:
    """Split a comma-separated parameter into trimmed, non-empty values."""
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]


def parse_int(raw: object) -> int | None:
    """Parse an integer leniently, returning None for anything unusable.

    Accepts a leading integer the way JavaScript's parseInt does
    ("4 stars" -> 4), so "abc" and "" yield None. Values outside the
    store's signed 64-bit integer range are unusable too.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if SQL_INT_MIN <= raw <= SQL_INT_MAX else None

    text = str(raw).strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    digits = ""
    for ch in text:
        if not ch.isascii() or not ch.isdigit():
            break
        digits += ch

    if not digits:
        return None
    if len(digits.lstrip("0")) > len(str(SQL_INT_MAX)):
        return None
    value = sign * int(digits)
    if not SQL_INT_MIN <= value <= SQL_INT_MAX:
        return None
    return value


def build_video_filter(params: Mapping[str, object]) -> VideoFilter:
    """Build a VideoFilter from query parameters.

    Recognised keys: title, actress, genre, rating. Others are ignored.
    The title is matched as given, surrounding whitespace included; tag
    alternatives are trimmed.

    Args:
        params: Mapping of raw parameter values (usually strings).

    Returns:
        VideoFilter; unconstrained where a parameter is absent or unusable.
    """
    title = params.get("title")
    title = str(title) if title is not None else ""

    actresses = split_alternatives(params.get("actress"))  # type: ignore[arg-type]
    genres = split_alternatives(params.get("genre"))  # type: ignore[arg-type]

    raw_rating = params.get("rating")
    min_rating = parse_int(raw_rating) if raw_rating not in (None, "") else None

    return VideoFilter(
        title_pattern=contains_pattern(title) if title else None,
        actress_patterns=tuple(contains_pattern(a) for a in actresses),
        genre_patterns=tuple(contains_pattern(g) for g in genres),
        min_rating=min_rating,
    )
