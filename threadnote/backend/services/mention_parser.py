"""
Mention Parser.

Finds "@<id>" references in note content. A reference is the mention
sigil followed by exactly ID_LENGTH alphanumerics; a longer alphanumeric
run is not a reference at all (no partial matches). Scanning is left to
right, so adjacent references such as "@aaaaaa@bbbbbb" both match.
"""

import re

from threadnote.backend.core.constants import ID_LENGTH, MENTION_SIGIL

REFERENCE_PATTERN = re.compile(
    rf"{re.escape(MENTION_SIGIL)}([A-Za-z0-9]{{{ID_LENGTH}}})(?![A-Za-z0-9])"
)


def find_all_references(content: str) -> list[tuple[str, int]]:
    """
    Find every reference occurrence in content.

    Returns:
        (target_id, position) pairs in content order, where position is
        the zero-based offset of the sigil
    """
    return [(match.group(1), match.start()) for match in REFERENCE_PATTERN.finditer(content)]


def extract_references(content: str) -> list[str]:
    """
    Get the distinct identifiers referenced in content.

    Order is first occurrence; callers should not rely on it.
    """
    return list(dict.fromkeys(target for target, _ in find_all_references(content)))


def find_positions(content: str, target_id: str) -> list[int]:
    """Get the ordered offsets of every reference to target_id."""
    return [
        position
        for target, position in find_all_references(content)
        if target == target_id
    ]
