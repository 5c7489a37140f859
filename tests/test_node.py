"""Tests for the storage node HTTP service."""

import json
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from sos_store.errors import BlobReadError, BlobWriteError
from sos_store.node import create_node_app
from sos_store.storage import BlobStore


class TestAlive:

    def test_alive(self, node_client):
        response = node_client.get("/alive")
        assert response.status_code == 200
        assert response.text == "alive"


class TestUpload:

    def test_upload_returns_result(self, node_client, store):
        response = node_client.post("/blob/abc123", content=b"hello world")

        assert response.status_code == 200
        assert response.json() == {"id": "abc123", "status": "OK", "size": 11}
        assert store.get("abc123") == b"hello world"

    def test_result_field_order(self, node_client):
        response = node_client.post("/blob/abc", content=b"xy")
        assert list(json.loads(response.content)) == ["id", "status", "size"]

    def test_empty_body(self, node_client, store):
        response = node_client.post("/blob/empty", content=b"")
        assert response.json()["size"] == 0
        assert store.get("empty") == b""

    def test_overwrite(self, node_client):
        node_client.post("/blob/abc", content=b"first")
        node_client.post("/blob/abc", content=b"second")
        assert node_client.get("/blob/abc").content == b"second"

    @pytest.mark.parametrize("blob_id", ["ABC", "abc.txt", "abc-1", "abc_1"])
    def test_invalid_id(self, node_client, store, blob_id):
        response = node_client.post(f"/blob/{blob_id}", content=b"data")

        assert response.status_code == 500
        assert response.text == "Alphanumeric IDs only."
        assert store.existing() == []

    def test_store_failure_is_500(self):
        failing = Mock(spec=BlobStore)
        failing.store.side_effect = BlobWriteError("abc", "No space left on device")
        client = TestClient(create_node_app(failing))

        response = client.post("/blob/abc", content=b"data")

        assert response.status_code == 500
        assert "No space left on device" in response.text


class TestGet:

    def test_round_trip(self, node_client):
        payload = bytes(range(256)) * 4
        node_client.post("/blob/bin", content=payload)

        response = node_client.get("/blob/bin")

        assert response.status_code == 200
        assert response.content == payload
        assert response.headers["content-type"] == "application/octet-stream"

    def test_missing_blob_is_404(self, node_client):
        response = node_client.get("/blob/nothere")
        assert response.status_code == 404

    @pytest.mark.parametrize("blob_id", ["ABC", "abc.txt", "a_b"])
    def test_invalid_id(self, node_client, blob_id):
        response = node_client.get(f"/blob/{blob_id}")
        assert response.status_code == 500
        assert response.text == "Alphanumeric IDs only."

    def test_read_failure_is_500(self):
        failing = Mock(spec=BlobStore)
        failing.get.side_effect = BlobReadError("abc", "Permission denied")
        client = TestClient(create_node_app(failing))

        response = client.get("/blob/abc")

        assert response.status_code == 500


class TestValidationBeforeStorage:
    """Invalid IDs are rejected without the store being consulted."""

    def test_store_never_called(self):
        store = Mock(spec=BlobStore)
        client = TestClient(create_node_app(store))

        client.get("/blob/NOPE")
        client.post("/blob/NOPE", content=b"x")
        client.post("/blob/a.b", content=b"x")

        store.get.assert_not_called()
        store.store.assert_not_called()


class TestSymlinkOutOfRoot:
    """A link in the store root that points elsewhere is never served."""

    @pytest.fixture
    def linked_client(self, store, tmp_path):
        outside = tmp_path / "outside"
        outside.write_bytes(b"secret")
        (store.root / "link").symlink_to(outside)
        return TestClient(create_node_app(store))

    def test_not_listed(self, linked_client):
        assert linked_client.get("/blob").json() == []

    def test_get_is_rejected(self, linked_client):
        response = linked_client.get("/blob/link")

        assert response.status_code == 500
        assert response.text == "Alphanumeric IDs only."

    def test_upload_is_rejected(self, linked_client, tmp_path):
        response = linked_client.post("/blob/link", content=b"overwrite")

        assert response.status_code == 500
        assert response.text == "Alphanumeric IDs only."
        assert (tmp_path / "outside").read_bytes() == b"secret"


class TestList:

    def test_empty_list(self, node_client):
        response = node_client.get("/blob")
        assert response.status_code == 200
        assert response.text == "[]"
        assert response.json() == []

    def test_lists_stored_ids(self, node_client):
        for blob_id in ["one", "two", "three"]:
            node_client.post(f"/blob/{blob_id}", content=blob_id.encode())

        response = node_client.get("/blob")

        assert sorted(response.json()) == ["one", "three", "two"]

    def test_idempotent(self, node_client):
        node_client.post("/blob/abc", content=b"x")
        assert sorted(node_client.get("/blob").json()) == sorted(node_client.get("/blob").json())


class TestFallback:
    """Anything not routed gets the fixed 404."""

    @pytest.mark.parametrize("method,path", [
        ("GET", "/"),
        ("GET", "/nothing/here"),
        ("GET", "/blob/"),
        ("GET", "/blob/a/b"),
        ("DELETE", "/blob/abc"),
        ("PUT", "/blob/abc"),
        ("POST", "/alive"),
        ("POST", "/blob"),
        ("GET", "/docs"),
    ])
    def test_fixed_404(self, node_client, method, path):
        response = node_client.request(method, path)
        assert response.status_code == 404
        assert response.text == "404 - content is not hosted here."

    def test_delete_does_not_remove_blob(self, node_client):
        node_client.post("/blob/keep", content=b"x")
        node_client.delete("/blob/keep")
        assert node_client.get("/blob/keep").content == b"x"
