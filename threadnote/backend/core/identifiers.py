"""
Note Identifiers.

Generation and validation of the short alphanumeric identifiers used as
note primary keys. The same identifier is what users type after the
mention sigil, so it must stay short and URL-safe.

Usage:
    from threadnote.backend.core.identifiers import generate_id, is_valid_id

    note_id = generate_id()
    assert is_valid_id(note_id)
"""

import secrets

from threadnote.backend.core.constants import ID_ALPHABET, ID_LENGTH


def generate_id() -> str:
    """
    Generate a random note identifier.

    Uniqueness is not guaranteed here. Callers check storage and retry
    on collision.

    Returns:
        A fixed-length identifier drawn from ID_ALPHABET
    """
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def is_valid_id(candidate: object) -> bool:
    """Return True if candidate is a well-formed note identifier."""
    if not isinstance(candidate, str) or len(candidate) != ID_LENGTH:
        return False
    return all(char in ID_ALPHABET for char in candidate)
