"""
Tests for the docshape REST API server.
"""

import pytest
from fastapi.testclient import TestClient

from docshape.server.app import create_app
from docshape.server.config import ServerConfig, set_config
from docshape.server.dependencies import StoreManager


@pytest.fixture
def client():
    """Create test client backed by an in-memory store."""
    config = ServerConfig(
        store_backend="memory",
        docs_enabled=True,
        max_documents_per_request=100,
    )
    set_config(config)
    StoreManager.shutdown()

    app = create_app(config)

    with TestClient(app) as client:
        yield client

    StoreManager.shutdown()


@pytest.fixture
def file_client(tmp_path):
    """Create test client backed by a file store."""
    config = ServerConfig(store_backend="file", data_dir=str(tmp_path))
    set_config(config)
    StoreManager.shutdown()

    with TestClient(create_app(config)) as client:
        yield client

    StoreManager.shutdown()


@pytest.fixture
def saved(client):
    """A saved query created through the API."""
    response = client.post(
        "/api/queries",
        json={
            "name": "Adults",
            "database": "people",
            "query": {"selector": {"age": {"$gte": 18}}, "limit": 25},
        },
    )
    return response.json()


class TestHealthEndpoint:
    """Health endpoint tests."""

    def test_health(self, client):
        """Test health check."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["saved_queries"] == 0
        assert "version" in data

    def test_settings(self, client):
        response = client.get("/api/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["store_config"]["backend"] == "memory"
        assert data["query_config"]["default_limit"] == 25

    def test_root(self, client):
        assert client.get("/").json()["api"] == "/api"


class TestSavedQueryEndpoints:
    """Saved-query CRUD tests."""

    def test_create(self, saved):
        assert saved["name"] == "Adults"
        assert saved["id"]
        assert saved["createdAt"] == saved["updatedAt"]

    def test_create_status(self, client):
        response = client.post("/api/queries", json={"name": "x", "id": "mine"})
        assert response.status_code == 201
        assert response.json()["id"] != "mine"

    def test_list(self, client, saved):
        client.post("/api/queries", json={"name": "Second"})

        response = client.get("/api/queries")

        assert response.status_code == 200
        assert [q["name"] for q in response.json()] == ["Adults", "Second"]

    def test_get(self, client, saved):
        response = client.get(f"/api/queries/{saved['id']}")
        assert response.status_code == 200
        assert response.json() == saved

    def test_get_missing(self, client):
        assert client.get("/api/queries/missing").status_code == 404

    def test_update(self, client, saved):
        response = client.put(
            f"/api/queries/{saved['id']}",
            json={"name": "Grown-ups", "createdAt": "ignored"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Grown-ups"
        assert data["database"] == "people"
        assert data["createdAt"] == saved["createdAt"]

    def test_update_missing(self, client):
        assert client.put("/api/queries/missing", json={"name": "x"}).status_code == 404

    def test_delete(self, client, saved):
        response = client.delete(f"/api/queries/{saved['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/api/queries/{saved['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/queries/missing").status_code == 404

    def test_export(self, client, saved):
        response = client.get("/api/queries/export/all")

        assert response.status_code == 200
        assert "saved-queries.json" in response.headers["content-disposition"]
        assert response.json() == [saved]

    def test_import(self, client, saved):
        records = [
            {"id": "q1", "name": "One", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": "q2", "name": "Two"},
        ]

        response = client.post("/api/queries/import", json=records)

        assert response.status_code == 200
        assert response.json()["data"]["count"] == 2
        ids = [q["id"] for q in client.get("/api/queries").json()]
        assert ids == ["q1", "q2"]
        assert client.get("/api/queries/q1").json()["createdAt"] == "2024-01-01T00:00:00.000Z"

    def test_import_rejects_non_list(self, client, saved):
        response = client.post("/api/queries/import", json={"name": "x"})

        assert response.status_code == 400
        assert len(client.get("/api/queries").json()) == 1

    def test_file_store_persists(self, file_client, tmp_path):
        created = file_client.post("/api/queries", json={"name": "Durable"}).json()

        assert (tmp_path / "saved_queries.json").exists()
        assert file_client.get(f"/api/queries/{created['id']}").status_code == 200


class TestDocumentEndpoints:
    """Document shaping endpoint tests."""

    def test_fields(self, client, people):
        response = client.post("/api/documents/fields", json={"documents": people})

        assert response.status_code == 200
        data = response.json()
        assert data["fields"] == ["active", "age", "city", "joined", "name"]
        assert data["types"]["age"] == "number"
        assert data["types"]["joined"] == "date"

    def test_fields_include_internal(self, client, people):
        response = client.post(
            "/api/documents/fields",
            json={"documents": people, "include_internal": True},
        )
        assert "_id" in response.json()["fields"]

    def test_process(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={
                "documents": people,
                "filters": [{"field": "age", "operator": "greaterThanOrEqual", "value": "25", "type": "number"}],
                "sort": [{"field": "age", "direction": "desc"}],
                "page": 1,
                "page_size": 2,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert [d["name"] for d in data["items"]] == ["carol", "alice"]
        assert data["page"]["total_pages"] == 2
        assert data["page"]["has_next"] is True
        assert data["stats"]["documents_scanned"] == 5

    def test_process_count_headers(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={
                "documents": people,
                "filters": [{"field": "city", "operator": "equals", "value": "Oslo"}],
                "page_size": 1,
            },
        )
        assert response.headers["X-Documents-Scanned"] == "5"
        assert response.headers["X-Documents-Matched"] == "2"
        assert response.headers["X-Documents-Returned"] == "1"
        assert "X-Response-Time" in response.headers

        health = client.get("/api/health")
        assert "X-Documents-Scanned" not in health.headers

    def test_process_or_logic(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={
                "documents": people,
                "filters": [
                    {"field": "city", "operator": "equals", "value": "Bergen"},
                    {"field": "name", "operator": "equals", "value": "dave"},
                ],
                "logic": "or",
            },
        )
        assert response.json()["total"] == 2

    def test_process_vacuous_filter(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={"documents": people, "filters": [{"field": "city", "operator": "equals"}]},
        )
        assert response.json()["total"] == 5

    def test_process_page_past_end(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={"documents": people, "page": 100, "page_size": 10},
        )
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_process_invalid_page(self, client, people):
        response = client.post("/api/documents/process", json={"documents": people, "page": 0})
        assert response.status_code == 422

    def test_process_unknown_type(self, client, people):
        response = client.post(
            "/api/documents/process",
            json={"documents": people, "filters": [{"field": "a", "value": "1", "type": "money"}]},
        )
        assert response.status_code == 422

    def test_too_many_documents(self, client):
        documents = [{"n": i} for i in range(101)]
        response = client.post("/api/documents/process", json={"documents": documents})
        assert response.status_code == 413


class TestQueryEndpoints:
    """Query building and parsing tests."""

    def test_build(self, client):
        response = client.post(
            "/api/query/build",
            json={"conditions": [{"field": "age", "operator": "$gt", "value": "25"}]},
        )

        assert response.status_code == 200
        assert response.json() == {"selector": {"age": {"$gt": 25}}, "limit": 25}

    def test_build_with_options(self, client):
        response = client.post(
            "/api/query/build",
            json={
                "conditions": [{"field": "status", "operator": "$in", "value": "open,shipped"}],
                "fields": ["status", "total"],
                "sort": {"field": "total", "direction": "desc"},
                "limit": 50,
            },
        )

        assert response.json() == {
            "selector": {"status": {"$in": ["open", "shipped"]}},
            "limit": 50,
            "fields": ["status", "total"],
            "sort": [{"total": "desc"}],
        }

    @pytest.mark.parametrize("body", [{"no_limit": True}, {"limit": None}, {"limit": "unbounded"}])
    def test_build_unbounded(self, client, body):
        response = client.post("/api/query/build", json={"conditions": [], **body})
        assert response.json()["limit"] == 1000000

    def test_parse(self, client):
        response = client.post(
            "/api/query/parse",
            json={"text": '```json\n{"selector": {"age": {"$gt": 30}}, "limit": 5}\n```'},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == {"selector": {"age": {"$gt": 30}}, "limit": 5}
        assert data["conditions"] == [
            {"field": "age", "operator": "greaterThan", "value": 30, "type": "number"},
        ]

    def test_parse_invalid(self, client):
        response = client.post("/api/query/parse", json={"text": "select * from people"})
        assert response.status_code == 400
