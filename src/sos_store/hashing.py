"""Content hashing for blob identifiers.

The proxy names every uploaded blob after the SHA-1 of its bytes, rendered
as lowercase hex. The digest is therefore also a valid blob ID.
"""

import hashlib


def compute_content_digest(data: bytes) -> str:
    """Compute the SHA-1 hex digest of a byte buffer.

    Args:
        data: Complete blob content

    Returns:
        40-character lowercase hex digest
    """
    return hashlib.sha1(data).hexdigest()


__all__ = ["compute_content_digest"]
