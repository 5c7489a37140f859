"""Node registry: the ordered list of storage nodes the proxy routes to.

Nodes are read once at startup from the system file, then the user file,
then the command line. Registry order is failover priority, not a load
balancing hint.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .constants import SYSTEM_NODE_FILE, USER_NODE_FILE_NAME

logger = logging.getLogger(__name__)


def user_node_file() -> Path:
    """Get the per-user node file (~/.sos.conf)."""
    return Path.home() / USER_NODE_FILE_NAME


def default_node_files() -> List[Path]:
    """Node files in reading order: system-wide first, then per-user."""
    return [SYSTEM_NODE_FILE, user_node_file()]


def read_node_file(path: Path) -> List[str]:
    """Read node addresses from a file, one per line.

    A missing or unreadable file contributes no nodes. Addresses are not
    validated here; a malformed entry fails when the proxy contacts it.

    Args:
        path: File to read

    Returns:
        Node addresses in file order, blank lines skipped
    """
    try:
        text = Path(path).read_text()
    except (OSError, UnicodeDecodeError):
        logger.debug("Skipping unreadable node file %s", path)
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_node_list(text: Optional[str]) -> List[str]:
    """Split a comma-separated node list, dropping empty entries."""
    if not text:
        return []
    return [entry.strip() for entry in text.split(",") if entry.strip()]


@dataclass(frozen=True)
class NodeRegistry:
    """Ordered, immutable sequence of storage node base addresses."""

    nodes: Tuple[str, ...] = ()

    @classmethod
    def from_sources(
        cls,
        node_files: Optional[Iterable[Path]] = None,
        extra: Optional[str] = None,
    ) -> "NodeRegistry":
        """Assemble the registry from node files and a command-line list.

        Args:
            node_files: Files to read in order (default: /etc/sos.conf, ~/.sos.conf)
            extra: Comma-separated addresses appended after file entries

        Returns:
            NodeRegistry preserving source order, duplicates included
        """
        if node_files is None:
            node_files = default_node_files()

        nodes: List[str] = []
        for path in node_files:
            nodes.extend(read_node_file(path))
        nodes.extend(parse_node_list(extra))
        return cls(tuple(nodes))

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)
