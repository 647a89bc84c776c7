"""
HTML escaping of untrusted input.

Pure functions: inputs are never mutated, a new structure is returned.
Escaping is idempotent so already-sanitized data (e.g. a profile list
echoed back by a client on update) is not double-escaped.
"""

import re
from typing import Any

_ENTITY_NAMES = "amp|lt|gt|quot|#x27|#x2F"

# An ampersand that does not already start one of the entities we emit.
_BARE_AMPERSAND = re.compile(rf"&(?!(?:{_ENTITY_NAMES});)")
_ENTITY = re.compile(rf"&(?:{_ENTITY_NAMES});")

_REPLACEMENTS = (
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)


def sanitize_string(value: str) -> str:
    """Escape HTML-special characters and trim surrounding whitespace.

    Args:
        value: Raw string from a request.

    Returns:
        The escaped string. Empty input yields an empty string.
    """
    if not value:
        return ""
    escaped = _BARE_AMPERSAND.sub("&amp;", value)
    for char, entity in _REPLACEMENTS:
        escaped = escaped.replace(char, entity)
    return escaped.strip()


def sanitize(value: Any) -> Any:
    """Recursively sanitize every string inside dicts, lists and tuples.

    Non-string leaves (numbers, booleans, None) are returned untouched.
    Dictionary keys are left as they are.
    """
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {key: sanitize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize(item) for item in value)
    return value


def display_length(value: str) -> int:
    """Length of a string as shown to users.

    Each entity emitted by sanitize_string counts as the one character it
    stands for, so a sanitized value measures the same as its raw input.
    """
    return len(_ENTITY.sub("&", value))
