"""Tests for the documents HTTP API."""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from docregistry.api import create_app
from docregistry.config.settings import Settings
from docregistry.errors import InternalError
from docregistry.store import DocumentStore


@pytest.fixture
def client(store):
    app = create_app(store=store, settings=Settings())
    with TestClient(app) as c:
        yield c


class TestDocumentsRouter:

    def test_add_document(self, client):
        response = client.post("/api/documents", json={"name": "Invoice", "description": "Q1 report"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["name"] == "Invoice"
        assert data["description"] == "Q1 report"
        assert data["createdAt"]
        assert data["updatedAt"] is None

    def test_add_document_without_description(self, client):
        response = client.post("/api/documents", json={"name": "Invoice"})
        assert response.status_code == 201
        assert response.json()["description"] is None

    def test_add_invalid_payload(self, client):
        response = client.post("/api/documents", json={"name": "  "})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "InvalidPayload"
        assert error["details"] == {"field": "name"}

    def test_add_non_string_name(self, client):
        response = client.post("/api/documents", json={"name": 5})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidPayload"

    @pytest.mark.parametrize("body", [
        {},
        {"json": []},
        {"json": "Invoice"},
        {"json": None},
        {"content": b"{bad", "headers": {"Content-Type": "application/json"}},
    ])
    def test_add_missing_or_malformed_body(self, client, body):
        response = client.post("/api/documents", **body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidPayload"
        assert client.get("/api/documents").json() == []

    @pytest.mark.parametrize("body", [
        {},
        {"json": ["Invoice"]},
        {"content": b"not json"},
    ])
    def test_update_missing_or_malformed_body(self, client, body):
        created = client.post("/api/documents", json={"name": "Invoice"}).json()

        response = client.patch(f"/api/documents/{created['id']}", **body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidPayload"
        assert client.get(f"/api/documents/{created['id']}").json() == created

    def test_list_documents_in_order(self, client):
        ids = [
            client.post("/api/documents", json={"name": name}).json()["id"]
            for name in ("Invoice", "Contract", "Receipt")
        ]

        response = client.get("/api/documents")
        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == ids

    def test_search(self, client):
        client.post("/api/documents", json={"name": "Invoice"})
        client.post("/api/documents", json={"name": "Contract"})

        response = client.get("/api/documents/search", params={"keyword": "Inv"})
        assert response.status_code == 200
        assert [d["name"] for d in response.json()] == ["Invoice"]

        response = client.get("/api/documents/search", params={"keyword": "zzz"})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("params", [{"keyword": ""}, {}])
    def test_search_invalid_keyword(self, client, params):
        response = client.get("/api/documents/search", params=params)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidKeyword"

    def test_get_document(self, client):
        created = client.post("/api/documents", json={"name": "Invoice"}).json()
        response = client.get(f"/api/documents/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing(self, client):
        response = client.get("/api/documents/missing")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NotFound"

    def test_update_document(self, client):
        created = client.post("/api/documents", json={"name": "Invoice"}).json()

        response = client.patch(f"/api/documents/{created['id']}", json={"description": "Q1"})

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "Q1"
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] is not None

    def test_update_without_fields(self, client):
        created = client.post("/api/documents", json={"name": "Invoice"}).json()
        response = client.patch(f"/api/documents/{created['id']}", json={})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidPayload"

    def test_delete_document(self, client):
        created = client.post("/api/documents", json={"name": "Invoice"}).json()

        response = client.delete(f"/api/documents/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

        response = client.delete(f"/api/documents/{created['id']}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NotFound"

    def test_health(self, client):
        client.post("/api/documents", json={"name": "Invoice"})
        response = client.get("/health")
        assert response.json() == {"status": "ok", "documents": 1}


class TestErrorHandling:

    def test_internal_error_is_surfaced(self):
        store = MagicMock(spec=DocumentStore)
        store.get_documents.side_effect = InternalError("get_documents: disk I/O error")
        app = create_app(store=store, settings=Settings())

        with TestClient(app) as client:
            response = client.get("/api/documents")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "InternalError"
        assert error["message"] == "get_documents: disk I/O error"

    def test_client_errors_logged_at_info(self, client, caplog):
        caplog.set_level(logging.INFO, logger="docregistry-api")
        client.get("/api/documents/missing")

        records = [r for r in caplog.records if r.name == "docregistry-api"]
        assert [r.levelno for r in records] == [logging.INFO]
        assert "rejected: NotFound" in records[0].getMessage()

    def test_internal_errors_logged_at_error(self, caplog):
        caplog.set_level(logging.INFO, logger="docregistry-api")
        store = MagicMock(spec=DocumentStore)
        store.count.side_effect = InternalError("count: closed")

        with TestClient(create_app(store=store, settings=Settings())) as client:
            assert client.get("/health").status_code == 500

        records = [r for r in caplog.records if r.name == "docregistry-api" and "failed" in r.getMessage()]
        assert [r.levelno for r in records] == [logging.ERROR]


class TestLifespan:

    def test_store_created_from_settings(self, tmp_path):
        settings = Settings(STORE_BACKEND="sqlite", SQLITE_PATH=str(tmp_path / "api.db"))

        with TestClient(create_app(settings=settings)) as client:
            client.post("/api/documents", json={"name": "Invoice"})
            store = client.app.state.store
            assert store.count() == 1

        # Owned store is closed at shutdown; data survives in the file
        with TestClient(create_app(settings=settings)) as client:
            names = [d["name"] for d in client.get("/api/documents").json()]
            assert names == ["Invoice"]
