"""Identity utilities for video records.

Record ids are store-assigned UUID4 values rendered as 32-character
lowercase hex. Client-supplied ids are parsed before any store lookup so
that malformed input is reported as "not found" rather than reaching the
database.
"""

import uuid

from video_catalog.catalog.errors import MalformedIdentifierError


def new_video_id() -> str:
    """Generate a new record id.

    Returns:
        32-character lowercase hex string.
    """
    return uuid.uuid4().hex


def parse_video_id(raw_id: str) -> str:
    """Parse a client-supplied id into canonical form.

    Accepts any spelling uuid.UUID accepts (hyphenated, braced, upper case)
    and returns the 32-character hex form.

    Args:
        raw_id: Identifier from the request path.

    Returns:
        Canonical hex id.

    Raises:
        MalformedIdentifierError: If raw_id is not a well-formed identifier.

    Examples:
        >>> parse_video_id("6F9619FF-8B86-D011-B42D-00C04FC964FF")
        '6f9619ff8b86d011b42d00c04fc964ff'
    """
    if not isinstance(raw_id, str) or not raw_id.strip():
        raise MalformedIdentifierError(str(raw_id))

    try:
        return uuid.UUID(raw_id.strip()).hex
    except (ValueError, AttributeError) as e:
        raise MalformedIdentifierError(raw_id) from e
