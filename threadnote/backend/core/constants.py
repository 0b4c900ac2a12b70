"""
Domain Constants.

Fixed limits of the note graph. These are properties of the data model,
not deployment settings, so they live in code rather than YAML.
"""

ID_LENGTH = 6
ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

MENTION_SIGIL = "@"

MIN_CONTENT_LENGTH = 1
MAX_CONTENT_LENGTH = 1000

# Replies may only target roots: depth 0 (root) and depth 1 (reply).
MAX_THREAD_DEPTH = 1

ID_GENERATION_ATTEMPTS = 5
