"""Routing proxy: content-addressed uploads and downloads across storage nodes.

Uploads are named after the SHA-1 of their content and written to the first
storage node that accepts them. Downloads are read from the first node that
has the blob. Nodes are always tried in registry order, one at a time.

Two HTTP listeners front the proxy:

    upload   POST /upload
    download GET  /fetch/{id}
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.concurrency import run_in_threadpool

from .client import NodeClient, NodeResponse
from .constants import OBJECT_NOT_FOUND_BODY, UPLOAD_FAILED_BODY
from .errors import InvalidBlobIdError, NoNodeAvailableError
from .failover import attempt
from .hashing import compute_content_digest
from .registry import NodeRegistry

logger = logging.getLogger(__name__)


def strip_extension(name: str) -> str:
    """Drop a trailing filename extension: ``abc123.jpg`` -> ``abc123``."""
    dot = name.rfind(".")
    if dot == -1:
        return name
    return name[:dot]


def _stored(response: NodeResponse) -> bool:
    # A node-side failure (disk full, permissions) should not end the search
    return response.status_code < 500


def _found(response: NodeResponse) -> bool:
    # A miss on one node says nothing about the nodes after it
    return response.status_code != 404


@dataclass(frozen=True)
class RoutedResponse:
    """A storage node response together with where it came from."""

    blob_id: str
    node: str
    response: NodeResponse


class RoutingProxy:
    """Stateless router over a fixed node registry."""

    def __init__(self, registry: NodeRegistry, client: Optional[NodeClient] = None):
        self.registry = registry
        self.client = client or NodeClient()

    def upload(self, data: bytes) -> RoutedResponse:
        """
        Store data on the first node that accepts it.

        Args:
            data: Complete upload body; the same buffer is sent to every node tried

        Returns:
            RoutedResponse with the content digest as blob_id

        Raises:
            NoNodeAvailableError: If every node was unreachable or failed
        """
        blob_id = compute_content_digest(data)
        node, response = attempt(
            self.registry,
            lambda node: self.client.upload(node, blob_id, data),
            accept=_stored,
        )
        logger.info("Uploaded %s (%d bytes) to %s", blob_id, len(data), node)
        return RoutedResponse(blob_id=blob_id, node=node, response=response)

    def download(self, name: str) -> RoutedResponse:
        """
        Fetch a blob from the first node that has it.

        Args:
            name: Requested identifier, optionally with a filename extension

        Returns:
            RoutedResponse relaying the serving node's reply

        Raises:
            InvalidBlobIdError: If nothing is left of name after stripping
            NoNodeAvailableError: If no node could serve the blob
        """
        blob_id = strip_extension(name)
        if not blob_id:
            raise InvalidBlobIdError(name)

        node, response = attempt(
            self.registry,
            lambda node: self.client.fetch(node, blob_id),
            accept=_found,
        )
        logger.debug("Fetched %s from %s", blob_id, node)
        return RoutedResponse(blob_id=blob_id, node=node, response=response)


def get_proxy(request: Request) -> RoutingProxy:
    """Dependency returning the proxy the app was created with."""
    return request.app.state.proxy


def _relay(routed: RoutedResponse) -> Response:
    response = routed.response
    return Response(
        content=response.content,
        status_code=response.status_code,
        media_type=response.media_type,
    )


def create_upload_app(proxy: RoutingProxy) -> FastAPI:
    """Build the upload listener application."""
    app = FastAPI(title="sos upload service", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.proxy = proxy

    @app.post("/upload")
    async def upload(request: Request, proxy: RoutingProxy = Depends(get_proxy)):
        data = await request.body()
        try:
            routed = await run_in_threadpool(proxy.upload, data)
        except NoNodeAvailableError as e:
            logger.error("Upload failed: %s", e)
            return PlainTextResponse(UPLOAD_FAILED_BODY, status_code=503)
        return _relay(routed)

    return app


def create_download_app(proxy: RoutingProxy) -> FastAPI:
    """Build the download listener application."""
    app = FastAPI(title="sos download service", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.proxy = proxy

    @app.get("/fetch/{name}")
    async def fetch(name: str, proxy: RoutingProxy = Depends(get_proxy)):
        try:
            routed = await run_in_threadpool(proxy.download, name)
        except (InvalidBlobIdError, NoNodeAvailableError) as e:
            logger.info("Fetch of %r failed: %s", name, e)
            return PlainTextResponse(OBJECT_NOT_FOUND_BODY, status_code=404)
        return _relay(routed)

    return app
