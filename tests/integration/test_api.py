"""End-to-end tests for the HTTP adapter.

Exercises every endpoint through FastAPI's TestClient against an
in-memory database, including status code mapping for domain errors.
"""

import pytest
from fastapi.testclient import TestClient

from taskboard.api import create_app
from tests.utils.factories import create_task, create_tasks


pytestmark = pytest.mark.integration


@pytest.fixture
def client(settings, engine):
    app = create_app(settings=settings, engine=engine)
    with TestClient(app) as client:
        yield client


def auth(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


class TestHealthAndAuthentication:
    """Test suite for unauthenticated access."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_missing_user_header(self, client):
        response = client.get("/tasks")

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthenticated."}

    def test_unknown_user(self, client):
        response = client.get("/tasks", headers={"X-User-Id": "4242"})

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthenticated."}

    def test_error_bodies_share_one_shape(self, client, alice):
        unauthenticated = client.get("/tasks/1")
        missing = client.get("/tasks/999", headers=auth(alice))

        assert set(unauthenticated.json()) == {"message"}
        assert set(missing.json()) == {"message"}


class TestTaskEndpoints:
    """Test suite for the task resource endpoints."""

    def test_happy_path(self, client, alice):
        created = client.post(
            "/tasks",
            json={"title": "Buy milk", "description": "2% organic"},
            headers=auth(alice),
        )
        assert created.status_code == 201
        task = created.json()
        assert task["status"] == "pending"
        assert task["user_id"] == alice.id

        listed = client.get("/tasks", headers=auth(alice))
        assert listed.status_code == 200
        assert [t["id"] for t in listed.json()["items"]] == [task["id"]]

        shown = client.get(f"/tasks/{task['id']}", headers=auth(alice))
        assert shown.status_code == 200
        assert shown.json()["title"] == "Buy milk"

        updated = client.patch(
            f"/tasks/{task['id']}", json={"status": "completed"}, headers=auth(alice)
        )
        assert updated.status_code == 200
        assert updated.json()["status"] == "completed"

        completed = client.get("/tasks/status/completed", headers=auth(alice))
        assert [t["id"] for t in completed.json()["items"]] == [task["id"]]
        pending = client.get("/tasks/status/pending", headers=auth(alice))
        assert pending.json()["items"] == []

        deleted = client.delete(f"/tasks/{task['id']}", headers=auth(alice))
        assert deleted.status_code == 204
        assert deleted.content == b""

        assert client.get(f"/tasks/{task['id']}", headers=auth(alice)).status_code == 404

    def test_create_ignores_status_and_owner(self, client, alice, bob):
        response = client.post(
            "/tasks",
            json={
                "title": "Sneaky",
                "description": "Try to plant a task",
                "status": "completed",
                "user_id": bob.id,
            },
            headers=auth(alice),
        )

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert response.json()["user_id"] == alice.id

    def test_create_validation_error(self, client, alice):
        response = client.post("/tasks", json={"title": ""}, headers=auth(alice))

        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "The given data was invalid."
        assert {tuple(e["loc"]) for e in body["errors"]} >= {("title",), ("description",)}

    def test_filter_invalid_status(self, client, alice):
        response = client.get("/tasks/status/bogus", headers=auth(alice))

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid status"}

    def test_filter_all_equals_list(self, client, session, alice):
        create_tasks(session, alice, 12)

        for page in (1, 2):
            listed = client.get("/tasks", params={"page": page}, headers=auth(alice))
            filtered = client.get(
                "/tasks/status/all", params={"page": page}, headers=auth(alice)
            )
            assert listed.json() == filtered.json()

    def test_pagination_metadata(self, client, session, alice):
        create_tasks(session, alice, 12)

        body = client.get("/tasks", params={"page": 2}, headers=auth(alice)).json()

        assert len(body["items"]) == 2
        assert body["page"] == 2
        assert body["per_page"] == 10
        assert body["total"] == 12
        assert body["last_page"] == 2
        assert body["has_more"] is False

    def test_show_other_users_task(self, client, session, alice, bob):
        task = create_task(session, alice)

        response = client.get(f"/tasks/{task.id}", headers=auth(bob))

        assert response.status_code == 200
        assert response.json()["user_id"] == alice.id

    def test_put_update(self, client, session, alice):
        task = create_task(session, alice)

        response = client.put(
            f"/tasks/{task.id}", json={"title": "Renamed"}, headers=auth(alice)
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"

    def test_non_owner_update_and_delete(self, client, session, alice, bob):
        task = create_task(session, alice)

        update = client.patch(
            f"/tasks/{task.id}", json={"status": "completed"}, headers=auth(bob)
        )
        delete = client.delete(f"/tasks/{task.id}", headers=auth(bob))

        assert update.status_code == 403
        assert delete.status_code == 403
        shown = client.get(f"/tasks/{task.id}", headers=auth(alice)).json()
        assert shown["status"] == "pending"

    def test_update_invalid_status(self, client, session, alice):
        task = create_task(session, alice)

        response = client.patch(
            f"/tasks/{task.id}", json={"status": "archived"}, headers=auth(alice)
        )

        assert response.status_code == 422

    def test_unknown_task(self, client, alice):
        assert client.get("/tasks/999", headers=auth(alice)).status_code == 404
        assert client.delete("/tasks/999", headers=auth(alice)).status_code == 404
        assert (
            client.patch("/tasks/999", json={"title": "x"}, headers=auth(alice)).status_code
            == 404
        )
