"""Storage package: blob store protocol and backends."""

from .base import BlobStore
from .factory import make_blob_store
from .fs import FilesystemBlobStore

__all__ = ["BlobStore", "FilesystemBlobStore", "make_blob_store"]
