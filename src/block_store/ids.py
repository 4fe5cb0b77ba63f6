"""Identifier normalization for page tree nodes.

Node ids appear in several spellings: dashed UUIDs, undashed hex, upper or
lower case, and embedded at the end of page URLs or ``Title-<id>`` slugs.
All of them map to the same lower-case, undashed 32-character form which is
used as the key of the identifier-to-node mapping.
"""

import re
from urllib.parse import urlparse

_HEX_ID_RE = re.compile(r"([0-9a-f]{32})$")


def normalize_id(raw_id: str) -> str:
    """Canonicalize a raw node identifier.

    Args:
        raw_id: Identifier, dashed UUID, page URL or ``Title-<id>`` slug

    Returns:
        Lower-case identifier without dashes. Strings that carry no
        32-character hex id are returned trimmed, lower-cased and undashed.

    Example:
        >>> normalize_id("0C7C5B8D-1C4F-4E8A-9E2B-3F1A2B3C4D5E")
        '0c7c5b8d1c4f4e8a9e2b3f1a2b3c4d5e'
    """
    value = raw_id.strip()
    if "://" in value:
        value = urlparse(value).path.rstrip("/").rsplit("/", 1)[-1]

    value = value.lower().replace("-", "")
    match = _HEX_ID_RE.search(value)
    if match:
        return match.group(1)
    return value
