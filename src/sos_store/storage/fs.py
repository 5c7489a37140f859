"""Filesystem blob storage backend."""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from ..errors import BlobReadError, BlobWriteError, InvalidBlobIdError
from ..keys import is_safe_key, require_safe_key

logger = logging.getLogger(__name__)

# Prefix for in-flight writes; never a valid blob ID
_TMP_PREFIX = ".tmp-"


def _fsync_dir(path: Path) -> None:
    """Fsync a directory so a completed rename survives a crash.

    Best-effort: some platforms and filesystems do not support it.
    """
    try:
        flags = os.O_RDONLY
        if hasattr(os, "O_DIRECTORY"):
            flags |= os.O_DIRECTORY
        fd = os.open(str(path), flags)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
    except OSError:
        logger.debug("Directory fsync not supported for %s", path)


class FilesystemBlobStore:
    """
    Local filesystem store with one file per blob directly under the root.

    Writes go through a temp file in the root followed by os.replace, so a
    reader sees either the previous blob or the new one, never a partial
    write. Concurrent writers to the same ID resolve as last-writer-wins.
    """

    def __init__(self, root: Path):
        """
        Initialize filesystem store.

        Args:
            root: Directory holding the blob files. Not created until setup().
        """
        self.root = Path(root)

    def setup(self) -> None:
        """Create the root directory if it is missing."""
        self.root.mkdir(parents=True, exist_ok=True)
        logger.debug("Blob store root: %s", self.root.resolve())

    def _blob_path(self, blob_id: str) -> Path:
        """
        Map a blob ID to its file, refusing anything that escapes the root.

        Raises:
            InvalidBlobIdError: If blob_id is unsafe or resolves outside root
        """
        require_safe_key(blob_id)
        root = self.root.resolve()
        target = (root / blob_id).resolve()
        if target.parent != root:
            raise InvalidBlobIdError(blob_id)
        return target

    def get(self, blob_id: str) -> Optional[bytes]:
        path = self._blob_path(blob_id)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            return None
        except OSError as e:
            raise BlobReadError(blob_id, str(e)) from e

    def store(self, blob_id: str, data: bytes) -> int:
        path = self._blob_path(blob_id)
        tmp: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                delete=False,
                dir=path.parent,
                prefix=_TMP_PREFIX,
            ) as f:
                tmp = Path(f.name)
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            raise BlobWriteError(blob_id, str(e)) from e

        _fsync_dir(path.parent)
        logger.debug("Stored blob %s (%d bytes)", blob_id, len(data))
        return len(data)

    def existing(self) -> List[str]:
        # Temp files, symlinks and anything not shaped like a blob ID are skipped
        with os.scandir(self.root) as entries:
            return [
                entry.name
                for entry in entries
                if is_safe_key(entry.name) and entry.is_file(follow_symlinks=False)
            ]
