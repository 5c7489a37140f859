"""HTTP client for talking to storage nodes from the proxy."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .constants import NODE_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def blob_url(node: str, blob_id: str) -> str:
    """Build the blob endpoint URL for a node base address."""
    return f"{node.rstrip('/')}/blob/{blob_id}"


@dataclass(frozen=True)
class NodeResponse:
    """A completed HTTP exchange with a storage node."""

    status_code: int
    content: bytes
    media_type: str = DEFAULT_MEDIA_TYPE

    @classmethod
    def from_response(cls, response) -> "NodeResponse":
        """Capture status, body and content type from a requests response."""
        return cls(
            status_code=response.status_code,
            content=response.content,
            media_type=response.headers.get("content-type", DEFAULT_MEDIA_TYPE),
        )


class NodeClient:
    """
    Issues blob requests to storage nodes.

    Transport failures surface as requests.RequestException; any completed
    exchange, whatever its status code, is returned as a NodeResponse.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = NODE_TIMEOUT):
        """
        Args:
            session: Session to send requests through (default: a new one)
            timeout: Seconds allowed per request, applied to connect and read
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def upload(self, node: str, blob_id: str, data: bytes) -> NodeResponse:
        """POST data to ``<node>/blob/<blob_id>``."""
        url = blob_url(node, blob_id)
        logger.debug("POST %s (%d bytes)", url, len(data))
        response = self.session.post(url, data=data, timeout=self.timeout)
        return NodeResponse.from_response(response)

    def fetch(self, node: str, blob_id: str) -> NodeResponse:
        """GET ``<node>/blob/<blob_id>``."""
        url = blob_url(node, blob_id)
        logger.debug("GET %s", url)
        response = self.session.get(url, timeout=self.timeout)
        return NodeResponse.from_response(response)

    def alive(self, node: str) -> bool:
        """Probe ``<node>/alive``; False on transport failure or non-200."""
        try:
            response = self.session.get(f"{node.rstrip('/')}/alive", timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Node %s unreachable: %s", node, e)
            return False
        return response.status_code == 200

    def close(self) -> None:
        self.session.close()
