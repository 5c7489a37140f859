"""Service configuration, built once at startup and passed explicitly."""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import (
    DOWNLOAD_PORT,
    NODE_HOST,
    NODE_PORT,
    NODE_STORE,
    NODE_TIMEOUT,
    PROXY_HOST,
    UPLOAD_PORT,
)
from .registry import NodeRegistry


@dataclass
class NodeConfig:
    """Configuration for a storage node (blob server)."""

    host: str = NODE_HOST
    port: int = NODE_PORT
    store: Path = field(default_factory=lambda: Path(NODE_STORE))
    provider: str = "fs"
    log_level: str = "info"


@dataclass
class ProxyConfig:
    """Configuration for the routing proxy (API server)."""

    registry: NodeRegistry = field(default_factory=NodeRegistry)
    host: str = PROXY_HOST
    upload_port: int = UPLOAD_PORT
    download_port: int = DOWNLOAD_PORT
    timeout: float = NODE_TIMEOUT
    log_level: str = "info"
