"""Tests for the HTTP surface of the API."""

import pytest
from fastapi.testclient import TestClient

from memberhub.api.app import create_app


@pytest.fixture
def client(gateway):
    """Test client serving the in-memory gateway."""
    return TestClient(create_app(gateway=gateway))


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestGraphQLEndpoint:
    def test_query_returns_data_envelope(self, client, gateway):
        gateway.add_user("alice", 12.5)

        response = client.post("/", json={"query": "{ users { name balance } }"})

        assert response.status_code == 200
        assert response.json() == {"data": {"users": [{"name": "alice", "balance": 12.5}]}}

    def test_variables_and_operation_name(self, client, gateway):
        alice = gateway.add_user("alice")
        query = """
            query Other { memberTypes { id } }
            query One($id: UUID!) { user(id: $id) { name } }
        """

        response = client.post(
            "/",
            json={"query": query, "variables": {"id": str(alice.id)}, "operationName": "One"},
        )

        assert response.json() == {"data": {"user": {"name": "alice"}}}

    def test_rejected_request_has_errors_only(self, client, gateway):
        response = client.post("/", json={"query": "{ users { "})

        assert response.status_code == 200
        body = response.json()
        assert "data" not in body
        assert body["errors"][0]["message"].startswith("Syntax Error")
        assert gateway.calls == []

    def test_too_deep_request_rejected(self, client):
        query = (
            "{ users { userSubscribedTo { userSubscribedTo { userSubscribedTo {"
            " userSubscribedTo { userSubscribedTo { id } } } } } } }"
        )

        response = client.post("/", json={"query": query})

        body = response.json()
        assert "data" not in body
        assert [error["message"] for error in body["errors"]] == [
            "'anonymous' exceeds maximum operation depth of 5"
        ]

    def test_mutation_round_trip(self, client):
        created = client.post(
            "/",
            json={"query": 'mutation { createUser(input: {name: "bob", balance: 3}) { id } }'},
        ).json()["data"]["createUser"]

        response = client.post("/", json={"query": '{ user(id: "%s") { name } }' % created["id"]})

        assert response.json() == {"data": {"user": {"name": "bob"}}}

    def test_missing_query_is_unprocessable(self, client):
        response = client.post("/", json={"variables": {}})

        assert response.status_code == 422


class TestRequestId:
    def test_request_id_generated(self, client):
        response = client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 32

    def test_caller_request_id_echoed(self, client):
        response = client.post(
            "/", json={"query": "{ memberTypes { id } }"}, headers={"X-Request-ID": "trace-1"}
        )

        assert response.headers["X-Request-ID"] == "trace-1"
