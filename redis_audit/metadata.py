"""
DEBUG OBJECT payload parsing.

The payload is a free-form line whose layout depends on the Redis version, e.g.

    Value at:0x7f... refcount:1 encoding:embstr serializedlength:5 lru:123 lru_seconds_idle:42

Only the two labelled integers are needed; everything about the format lives here.
"""

import re

from .errors import MalformedMetadataError

SERIALIZED_LENGTH = "serializedlength"
IDLE_SECONDS = "lru_seconds_idle"

_FIELD_PATTERNS = {
    SERIALIZED_LENGTH: re.compile(r"\bserializedlength:(\d+)"),
    IDLE_SECONDS: re.compile(r"\blru_seconds_idle:(\d+)"),
}


def _extract(field, payload):
    match = _FIELD_PATTERNS[field].search(payload)
    if match is None:
        raise MalformedMetadataError(field, payload)
    return int(match.group(1))


def parse_debug_payload(payload):
    """Return ``(serialized_length, idle_seconds)`` from a DEBUG OBJECT reply."""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if not isinstance(payload, str):
        raise MalformedMetadataError(SERIALIZED_LENGTH, repr(payload))
    return _extract(SERIALIZED_LENGTH, payload), _extract(IDLE_SECONDS, payload)
