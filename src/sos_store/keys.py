"""Blob ID validation.

A blob ID becomes a file name beneath the store root, so it is restricted to
lowercase letters and digits. This check runs before any filesystem call and
is the primary guard against path traversal.
"""

import re

from .constants import BLOB_ID_PATTERN
from .errors import InvalidBlobIdError

_BLOB_ID = re.compile(BLOB_ID_PATTERN)


def is_safe_key(key: str) -> bool:
    """Return True if key is a non-empty string of ``[a-z0-9]`` characters."""
    if not isinstance(key, str):
        return False
    return _BLOB_ID.fullmatch(key) is not None


def require_safe_key(key: str) -> str:
    """Return key unchanged, or raise InvalidBlobIdError if it is unsafe."""
    if not is_safe_key(key):
        raise InvalidBlobIdError(key)
    return key
