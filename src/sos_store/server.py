"""Process entry points that bind the HTTP services."""

import asyncio
import logging
from typing import List

import uvicorn

from .client import NodeClient
from .config import NodeConfig, ProxyConfig
from .node import create_node_app
from .proxy import RoutingProxy, create_download_app, create_upload_app
from .storage import make_blob_store

logger = logging.getLogger(__name__)


def run_node(config: NodeConfig) -> None:
    """Set up the blob store and serve the storage node until shutdown."""
    store = make_blob_store(config.provider, config.store)
    store.setup()
    app = create_node_app(store)
    logger.info("Serving blobs from %s", config.store)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


def build_proxy_servers(config: ProxyConfig) -> List[uvicorn.Server]:
    """Create the upload and download listeners sharing one RoutingProxy."""
    proxy = RoutingProxy(config.registry, NodeClient(timeout=config.timeout))
    return [
        uvicorn.Server(uvicorn.Config(
            create_upload_app(proxy),
            host=config.host,
            port=config.upload_port,
            log_level=config.log_level,
        )),
        uvicorn.Server(uvicorn.Config(
            create_download_app(proxy),
            host=config.host,
            port=config.download_port,
            log_level=config.log_level,
        )),
    ]


async def serve_together(servers: List[uvicorn.Server]) -> None:
    """Run servers concurrently; when any one stops, stop the rest."""

    async def serve(server: uvicorn.Server) -> None:
        try:
            await server.serve()
        finally:
            for peer in servers:
                peer.should_exit = True

    await asyncio.gather(*(serve(server) for server in servers))


async def serve_proxy(config: ProxyConfig) -> None:
    """Serve both proxy listeners until either one exits."""
    await serve_together(build_proxy_servers(config))


def run_proxy(config: ProxyConfig) -> None:
    asyncio.run(serve_proxy(config))
