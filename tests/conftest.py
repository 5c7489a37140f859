"""Shared test fixtures and utilities."""

import pytest
import requests
from fastapi.testclient import TestClient

from sos_store.client import NodeClient
from sos_store.node import create_node_app
from sos_store.storage import FilesystemBlobStore


class RoutedSession:
    """Stand-in for requests.Session that dispatches to in-process node apps.

    Addresses registered with add_node are served by a TestClient; any other
    address raises requests.ConnectionError, like a host refusing connections.
    """

    def __init__(self):
        self.nodes = {}
        self.calls = []
        self.timeouts = []

    def add_node(self, address, app):
        self.nodes[address.rstrip("/")] = TestClient(app)

    def _route(self, method, url, timeout):
        self.calls.append((method, url))
        self.timeouts.append(timeout)
        for address, client in self.nodes.items():
            if url.startswith(address + "/"):
                return client, url[len(address):]
        raise requests.ConnectionError(f"Connection refused: {url}")

    def post(self, url, data=None, timeout=None):
        client, path = self._route("POST", url, timeout)
        return client.post(path, content=data)

    def get(self, url, timeout=None):
        client, path = self._route("GET", url, timeout)
        return client.get(path)

    def close(self):
        pass


@pytest.fixture
def store(tmp_path):
    """A set-up filesystem store in a fresh directory."""
    blob_store = FilesystemBlobStore(tmp_path / "blobs")
    blob_store.setup()
    return blob_store


@pytest.fixture
def node_client(store):
    """TestClient for a storage node backed by the store fixture."""
    return TestClient(create_node_app(store))


@pytest.fixture
def session():
    return RoutedSession()


@pytest.fixture
def make_node(tmp_path, session):
    """Factory fixture: start an in-process storage node at an address.

    Returns the node's store so tests can inspect what landed where.
    """
    def _make_node(address: str) -> FilesystemBlobStore:
        name = address.split("//")[-1].replace(":", "_").replace("/", "_")
        node_store = FilesystemBlobStore(tmp_path / "nodes" / name)
        node_store.setup()
        session.add_node(address, create_node_app(node_store))
        return node_store
    return _make_node


@pytest.fixture
def node_http(session):
    """NodeClient sending through the routed session."""
    return NodeClient(session=session, timeout=2.5)
