"""
Tests for the budgeting API endpoints.

Tests FastAPI routes against in-memory repositories.
Validates the response envelope, status codes, error mapping and the
cascade behavior visible through the API.
"""

import json
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from sharedbudget.core.config import Settings
from sharedbudget.domain.budgeting.errors import DatabaseError
from sharedbudget.interfaces.budgeting.dependencies import get_group_repository
from sharedbudget.main import create_app

SMITHS = {
    "name": "Smiths",
    "type": "family",
    "profiles": [{"name": "John"}, {"name": "Jane", "color": "#FF00AA"}],
}


class _FailingGroupRepository:
    def __init__(self, error: Exception) -> None:
        self._error = error

    def list_all(self):
        raise self._error


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    def test_reports_status_and_version(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": "0.1.0"}


class TestGroupsEndpoint:
    """Tests for GET/POST /api/profiles."""

    def test_empty_list(self, client: TestClient) -> None:
        response = client.get("/api/profiles")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_create_group(self, client: TestClient) -> None:
        """Profiles without color get the default; ids are assigned."""
        response = client.post("/api/profiles", json=SMITHS)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        group = body["data"]
        assert ObjectId.is_valid(group["id"])
        assert group["name"] == "Smiths"
        assert group["type"] == "family"
        assert group["createdAt"] is not None
        assert "updatedAt" in group
        john, jane = group["profiles"]
        assert john["color"] == "#3B82F6"
        assert john["avatar"] == ""
        assert jane["color"] == "#FF00AA"
        assert ObjectId.is_valid(john["id"])

        listed = client.get("/api/profiles").json()["data"]
        assert [g["id"] for g in listed] == [group["id"]]

    def test_bogus_type(self, client: TestClient, group_repo) -> None:
        response = client.post(
            "/api/profiles", json={**SMITHS, "type": "bogus"}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "VALIDATION_ERROR"
        assert "family, roommates, personal, other, friends" in error["message"]
        assert group_repo.calls == []

    def test_zero_profiles(self, client: TestClient, group_repo) -> None:
        response = client.post("/api/profiles", json={**SMITHS, "profiles": []})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "At least one profile is required"
        assert group_repo.calls == []

    def test_details_listed_in_development(self, client: TestClient) -> None:
        response = client.post("/api/profiles", json={})
        error = response.json()["error"]
        assert response.json()["success"] is False
        assert "Group name is required" in error["details"]

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/profiles",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "VALIDATION_ERROR"
        assert error["message"] == "Invalid request payload"

    def test_html_is_escaped(self, client: TestClient) -> None:
        response = client.post(
            "/api/profiles",
            json={"name": "<script>", "type": "other", "profiles": [{"name": "A"}]},
        )
        assert response.json()["data"]["name"] == "&lt;script&gt;"


class TestUpdateGroupEndpoint:
    """Tests for PUT /api/profiles/{id}."""

    def test_malformed_id(self, client: TestClient, group_repo) -> None:
        """Rejected before persistence is touched."""
        response = client.put("/api/profiles/not-an-id", json=SMITHS)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid group ID format"
        assert group_repo.calls == []

    def test_missing_group(self, client: TestClient) -> None:
        response = client.put(f"/api/profiles/{ObjectId()}", json=SMITHS)
        assert response.status_code == 404
        error = response.json()["error"]
        assert error == {"type": "NOT_FOUND_ERROR", "message": "Group not found"}

    def test_missing_group_reported_before_body_errors(self, client: TestClient) -> None:
        response = client.put(
            f"/api/profiles/{ObjectId()}", json={"name": "", "profiles": []}
        )
        assert response.status_code == 404
        assert response.json()["error"]["type"] == "NOT_FOUND_ERROR"

    def test_invalid_body_for_existing_group(
        self, client: TestClient, group_repo, stored_group
    ) -> None:
        response = client.put(
            f"/api/profiles/{stored_group.id}", json={"name": "", "profiles": []}
        )
        assert response.status_code == 400
        assert "save" not in group_repo.calls

    def test_replaces_profiles(self, client: TestClient, stored_group) -> None:
        kept = stored_group.profiles[0]
        response = client.put(
            f"/api/profiles/{stored_group.id}",
            json={
                "name": "Smith household",
                "profiles": [{"id": kept.id, "name": kept.name}, {"name": "Baby"}],
            },
        )
        assert response.status_code == 200
        group = response.json()["data"]
        assert group["name"] == "Smith household"
        assert [p["name"] for p in group["profiles"]] == ["John", "Baby"]
        assert group["profiles"][0]["id"] == kept.id


class TestDeleteGroupEndpoint:
    """Tests for DELETE /api/profiles/{id}."""

    def test_delete_group_cascades(
        self, client: TestClient, stored_group, transaction_repo
    ) -> None:
        client.post(
            "/api/transactions",
            json={
                "amount": 10,
                "description": "Pizza night",
                "category": "Food",
                "date": "2024-03-01",
                "type": "expense",
                "profileId": stored_group.profiles[0].id,
                "groupId": stored_group.id,
            },
        )
        assert len(transaction_repo.list()) == 1

        response = client.delete(f"/api/profiles/{stored_group.id}")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Group deleted successfully",
        }
        assert transaction_repo.list() == []
        assert client.get("/api/profiles").json()["data"] == []

    def test_empty_profile_id_deletes_group(self, client: TestClient, stored_group) -> None:
        response = client.delete(f"/api/profiles/{stored_group.id}?profileId=")
        assert response.json()["message"] == "Group deleted successfully"

    def test_delete_missing_group(self, client: TestClient) -> None:
        response = client.delete(f"/api/profiles/{ObjectId()}")
        assert response.status_code == 404

    def test_delete_profile(self, client: TestClient, stored_group) -> None:
        john, jane = stored_group.profiles
        response = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": john.id}
        )
        assert response.status_code == 200
        profiles = response.json()["data"]["profiles"]
        assert [p["id"] for p in profiles] == [jane.id]

    def test_delete_last_profile(self, client: TestClient, stored_group) -> None:
        john, jane = stored_group.profiles
        first = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": john.id}
        )
        assert first.status_code == 200

        last = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": jane.id}
        )
        assert last.status_code == 400
        assert last.json()["error"]["message"] == (
            "Cannot delete the last profile in a group. Delete the group instead."
        )
        listed = client.get("/api/profiles").json()["data"]
        assert [p["id"] for p in listed[0]["profiles"]] == [jane.id]

    def test_duplicate_profile_ids_never_empty_a_group(
        self, client: TestClient, stored_group
    ) -> None:
        john = stored_group.profiles[0]
        updated = client.put(
            f"/api/profiles/{stored_group.id}",
            json={
                "name": "Smiths",
                "profiles": [{"id": john.id, "name": "A"}, {"id": john.id, "name": "B"}],
            },
        )
        assert updated.status_code == 200
        first, second = updated.json()["data"]["profiles"]
        assert first["id"] == john.id
        assert second["id"] != john.id

        response = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": john.id}
        )
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["data"]["profiles"]] == ["B"]

        last = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": second["id"]}
        )
        assert last.status_code == 400

    def test_malformed_profile_id(self, client: TestClient, stored_group) -> None:
        response = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": "nope"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid profile ID format"

    def test_unknown_profile(self, client: TestClient, stored_group) -> None:
        response = client.delete(
            f"/api/profiles/{stored_group.id}", params={"profileId": str(ObjectId())}
        )
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Profile not found"


class TestTransactionsEndpoint:
    """Tests for /api/transactions."""

    def _payload(self, group) -> dict:
        return {
            "amount": 54.2,
            "description": "Electricity bill",
            "category": "Utilities",
            "date": "2024-03-05",
            "type": "expense",
            "profileId": group.profiles[1].id,
            "groupId": group.id,
        }

    def test_create_list_delete(self, client: TestClient, stored_group) -> None:
        created = client.post("/api/transactions", json=self._payload(stored_group))
        assert created.status_code == 201
        data = created.json()["data"]
        assert data["profileId"] == stored_group.profiles[1].id
        assert data["groupId"] == stored_group.id
        assert "createdAt" in data

        listed = client.get("/api/transactions", params={"groupId": stored_group.id})
        assert [t["id"] for t in listed.json()["data"]] == [data["id"]]

        deleted = client.delete(f"/api/transactions/{data['id']}")
        assert deleted.status_code == 200
        again = client.delete(f"/api/transactions/{data['id']}")
        assert again.status_code == 404
        assert again.json()["error"]["message"] == "Transaction not found"

    def test_list_empty(self, client: TestClient) -> None:
        assert client.get("/api/transactions").json() == {"success": True, "data": []}

    def test_list_rejects_malformed_filter(self, client: TestClient) -> None:
        response = client.get("/api/transactions", params={"groupId": "bad"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid group ID format"

    def test_create_for_unknown_group(self, client: TestClient, stored_group) -> None:
        payload = {**self._payload(stored_group), "groupId": str(ObjectId())}
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Group not found"

    def test_create_with_malformed_profile_id(
        self, client: TestClient, stored_group
    ) -> None:
        payload = {**self._payload(stored_group), "profileId": "abc"}
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid profile ID format"

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity", '"12"', "true"])
    def test_amount_must_be_a_finite_number(
        self, client: TestClient, stored_group, transaction_repo, amount
    ) -> None:
        body = json.dumps({**self._payload(stored_group), "amount": "AMOUNT"})
        response = client.post(
            "/api/transactions",
            content=body.replace('"AMOUNT"', amount),
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["type"] == "VALIDATION_ERROR"
        assert transaction_repo.list() == []


class TestBudgetsEndpoint:
    """Tests for /api/budgets."""

    def test_create_list_delete(self, client: TestClient, stored_group) -> None:
        payload = {
            "category": "Food",
            "amount": 500,
            "period": "2024-03",
            "profileId": stored_group.profiles[0].id,
            "groupId": stored_group.id,
        }
        created = client.post("/api/budgets", json=payload)
        assert created.status_code == 201
        budget = created.json()["data"]
        assert budget["period"] == "2024-03"
        assert budget["amount"] == 500

        listed = client.get(
            "/api/budgets", params={"profileId": stored_group.profiles[0].id}
        )
        assert [b["id"] for b in listed.json()["data"]] == [budget["id"]]

        assert client.delete(f"/api/budgets/{budget['id']}").status_code == 200

    def test_invalid_period(self, client: TestClient, stored_group) -> None:
        response = client.post(
            "/api/budgets",
            json={
                "category": "Food",
                "amount": 500,
                "period": "March",
                "profileId": stored_group.profiles[0].id,
                "groupId": stored_group.id,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid period format"

    def test_delete_malformed_id(self, client: TestClient) -> None:
        response = client.delete("/api/budgets/123")
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid budget ID format"


class TestErrorEnvelope:
    """Tests for error mapping at the route boundary and outside it."""

    def test_unknown_path(self, client: TestClient) -> None:
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"]["type"] == "NOT_FOUND_ERROR"

    def test_database_error(self, app, client: TestClient) -> None:
        app.dependency_overrides[get_group_repository] = lambda: _FailingGroupRepository(
            DatabaseError("Failed to fetch user groups", details="timed out")
        )
        response = client.get("/api/profiles")
        assert response.status_code == 500
        error = response.json()["error"]
        assert error["type"] == "DATABASE_ERROR"
        assert error["message"] == "Failed to fetch user groups"
        assert error["details"] == "timed out"

    def test_unexpected_error_in_development(self, app, client: TestClient) -> None:
        app.dependency_overrides[get_group_repository] = lambda: _FailingGroupRepository(
            RuntimeError("kaboom")
        )
        response = client.get("/api/profiles")
        assert response.status_code == 500
        assert response.json()["error"] == {"type": "SERVER_ERROR", "message": "kaboom"}

    def test_unexpected_error_in_production(self) -> None:
        app = create_app(
            settings=Settings(
                mongodb_uri="mongodb://localhost:27017/test", environment="production"
            ),
            mongo_connection=MagicMock(),
        )
        app.dependency_overrides[get_group_repository] = lambda: _FailingGroupRepository(
            RuntimeError("secret internals")
        )
        response = TestClient(app).get("/api/profiles")
        assert response.status_code == 500
        assert response.json()["error"] == {
            "type": "SERVER_ERROR",
            "message": "Internal server error",
        }

    def test_fallback_view_outside_routes(self, app) -> None:
        """Errors that bypass the route boundary still get an envelope."""

        def boom():
            raise ConnectionError("mongo unreachable")

        app.add_api_route("/boom", boom)
        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"]["type"] == "DATABASE_ERROR"
        assert body["error"]["retryable"] is True
        assert body["error"]["debug"]["name"] == "ConnectionError"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" not in response.headers

    def test_fallback_view_headers_in_production(self) -> None:
        def boom():
            raise ConnectionError("mongo unreachable")

        app = create_app(
            settings=Settings(
                mongodb_uri="mongodb://localhost:27017/test", environment="production"
            ),
            mongo_connection=MagicMock(),
        )
        app.add_api_route("/boom", boom)
        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.headers["Content-Security-Policy"] == "default-src 'self'"
        assert response.headers["X-Frame-Options"] == "DENY"
