"""Base protocol for blob storage backends."""

from typing import List, Optional, Protocol


class BlobStore(Protocol):
    """
    Protocol for blob storage backends.

    All backends must provide setup/get/store/existing operations.
    Blob ID validation happens before a backend is called; backends may
    validate again but must never touch storage for an unsafe ID.
    """

    def setup(self) -> None:
        """
        Prepare the backend for use.

        Called once at startup. Must be idempotent.
        """
        ...

    def get(self, blob_id: str) -> Optional[bytes]:
        """
        Read a blob.

        Args:
            blob_id: Validated blob ID

        Returns:
            Blob content, or None if no blob is stored under blob_id
        """
        ...

    def store(self, blob_id: str, data: bytes) -> int:
        """
        Create or replace a blob.

        Args:
            blob_id: Validated blob ID
            data: Complete blob content

        Returns:
            Number of bytes stored

        Raises:
            BlobWriteError: If the blob could not be written
        """
        ...

    def existing(self) -> List[str]:
        """
        List the IDs of all stored blobs.

        Order is backend-defined and not guaranteed to be sorted.
        """
        ...
