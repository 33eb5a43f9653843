"""
HTTP surface tests through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from taskboard.config import get_settings
from taskboard.infrastructure.auth import get_jwt_handler
from taskboard.infrastructure.db.database import get_db
from taskboard.main import app


API = get_settings().api_prefix


@pytest.fixture
def client(org):
    app.dependency_overrides[get_db] = lambda: org
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(user_id, role="STAFF", department_id="dept-backend", is_hr_admin=False):
    token = get_jwt_handler().create_access_token(user_id, role, department_id, is_hr_admin)
    return {"Authorization": f"Bearer {token}"}


ALICE = auth_header("alice")
CAROL = auth_header("carol", department_id="dept-sales")
MANAGER = auth_header("mgr-eng", role="MANAGER", department_id="dept-eng")


def create(client, **overrides):
    body = {
        "title": "Write onboarding guide",
        "due_date": "2025-02-28",
        "assignee_ids": ["alice"],
        "tags": ["docs"],
    }
    body.update(overrides)
    return client.post(f"{API}/tasks", json=body, headers=ALICE)


class TestTaskRoutes:
    """Status codes and payloads of the task routes."""

    def test_requires_token(self, client):
        response = client.post(f"{API}/tasks", json={})
        assert response.status_code in (401, 403)

    def test_bad_token(self, client):
        response = client.get(f"{API}/tasks/anything", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_create_and_get(self, client):
        response = create(client)

        assert response.status_code == 201
        task = response.json()
        assert task["priority_label"] == "Medium"
        assert task["status"] == "TO_DO"

        fetched = client.get(f"{API}/tasks/{task['id']}", headers=ALICE)
        assert fetched.status_code == 200
        assert fetched.json()["tags"] == ["docs"]

    def test_validation_error_maps_to_422(self, client):
        response = create(client, assignee_ids=["alice", "gone"])

        assert response.status_code == 422
        assert response.json()["detail"]["reason"] == "invalid_assignees"

    def test_forbidden_and_not_found(self, client):
        task_id = create(client).json()["id"]

        assert client.get(f"{API}/tasks/{task_id}", headers=CAROL).status_code == 403
        assert client.get(f"{API}/tasks/missing", headers=ALICE).status_code == 404

    def test_status_and_logs(self, client):
        task_id = create(client).json()["id"]

        response = client.patch(f"{API}/tasks/{task_id}/status", json={"status": "IN_PROGRESS"}, headers=ALICE)
        assert response.status_code == 200
        assert response.json()["start_date"] is not None

        logs = client.get(f"{API}/tasks/{task_id}/logs", headers=ALICE).json()
        assert {entry["field"] for entry in logs} >= {"Task", "Status", "Start Date"}

    def test_subtask_and_archive(self, client):
        parent_id = create(client).json()["id"]
        subtask = client.post(
            f"{API}/tasks/{parent_id}/subtasks",
            json={"title": "Screenshots", "due_date": "2025-02-01", "assignee_ids": ["alice"]},
            headers=ALICE,
        )
        assert subtask.status_code == 201
        assert subtask.json()["parent_task_id"] == parent_id

        assert client.post(f"{API}/tasks/{parent_id}/archive", headers=ALICE).status_code == 403
        archived = client.post(f"{API}/tasks/{parent_id}/archive", headers=MANAGER)
        assert archived.status_code == 200
        assert archived.json()["is_archived"] is True

        child = client.get(f"{API}/tasks/{subtask.json()['id']}", headers=ALICE).json()
        assert child["is_archived"] is True

    def test_remove_missing_tag(self, client):
        task_id = create(client).json()["id"]

        response = client.delete(f"{API}/tasks/{task_id}/tags/later", headers=ALICE)

        assert response.status_code == 422
        assert response.json()["detail"]["reason"] == "tag_not_found"


class TestDepartmentRoutes:

    def test_dashboard(self, client):
        create(client)

        response = client.get(f"{API}/departments/dashboard", headers=MANAGER)

        assert response.status_code == 200
        body = response.json()
        assert body["department_id"] == "dept-eng"
        assert body["metrics"]["total"] == 1

    def test_staff_cannot_create_department(self, client):
        response = client.post(
            f"{API}/departments", json={"name": "Skunkworks", "parent_id": "dept-backend"}, headers=ALICE
        )
        assert response.status_code == 403


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
