"""Factory for creating blob storage instances."""

from pathlib import Path
from typing import Union

from ..errors import UnsupportedProviderError
from .base import BlobStore
from .fs import FilesystemBlobStore


def make_blob_store(provider: str, root: Union[str, Path]) -> BlobStore:
    """
    Create a blob store backend by provider name.

    The returned store has not been set up; callers run setup() once at
    startup.

    Args:
        provider: Backend name ("fs")
        root: Location the backend stores blobs under

    Returns:
        BlobStore instance

    Raises:
        UnsupportedProviderError: If provider is not known
    """
    if provider == "fs":
        return FilesystemBlobStore(Path(root))

    raise UnsupportedProviderError(provider)
