"""Normalization of performer/genre tag input.

Clients may send a single string or a list of strings for a tag field.
normalize_tags() turns either into an ordered set:

- None, "", [] or a list of blank strings -> None (field treated as absent)
- "Ann" -> ["Ann"]
- ["Ann", " ", "Bea", "Ann"] -> ["Ann", "Bea"] (blanks dropped, first
  occurrence kept)

Values are otherwise kept as supplied.
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_tags(value: str | Iterable[str] | None) -> list[str] | None:
    """Coerce scalar-or-list tag input to an ordered, de-duplicated list.

    Args:
        value: Raw tag input.

    Returns:
        Non-empty list of tags, or None if nothing usable was supplied.
    """
    if value is None:
        return None

    items = [value] if isinstance(value, str) else list(value)

    seen: set[str] = set()
    tags: list[str] = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            continue
        if item in seen:
            continue
        seen.add(item)
        tags.append(item)

    return tags or None
