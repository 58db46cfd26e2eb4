"""HTTP tests for the task endpoints."""
from datetime import datetime
import inspect

import pytest
from sqlmodel import Session, func, select

from todo_api.models.task import Task


def count_tasks(engine) -> int:
    with Session(engine) as s:
        return s.exec(select(func.count()).select_from(Task)).one()


def create(client, headers, **body):
    response = client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


def test_create_with_title_only_uses_defaults(client, alice_headers):
    response = client.post("/api/tasks", json={"title": "Buy milk"}, headers=alice_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Task created successfully"
    task = body["task"]
    assert task["title"] == "Buy milk"
    assert task["priority"] == "medium"
    assert task["status"] == "pending"
    assert task["dueDate"] is None
    assert task["description"] is None
    assert set(task) == {
        "id", "userId", "title", "description", "priority",
        "status", "dueDate", "createdAt", "updatedAt",
    }


def test_round_trip_keeps_values(client, alice_headers):
    sent = {
        "title": "Dentist",
        "description": "Bring insurance card",
        "priority": "high",
        "status": "in_progress",
        "dueDate": "2025-06-30",
    }
    created = create(client, alice_headers, **sent)

    response = client.get(f"/api/tasks/{created['id']}", headers=alice_headers)
    assert response.status_code == 200
    fetched = response.json()["task"]
    for key, value in sent.items():
        assert fetched[key] == value


def test_list_empty(client, alice_headers):
    response = client.get("/api/tasks", headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == {"count": 0, "tasks": []}


def test_list_newest_first(client, alice_headers):
    first = create(client, alice_headers, title="First")
    second = create(client, alice_headers, title="Second")

    body = client.get("/api/tasks", headers=alice_headers).json()
    assert body["count"] == 2
    assert [t["id"] for t in body["tasks"]] == [second["id"], first["id"]]


@pytest.mark.parametrize("body", [
    {},
    {"title": "   "},
    {"title": 42},
    {"title": "x", "priority": "urgent"},
    {"title": "x", "status": "blocked"},
    {"title": "x", "dueDate": "someday"},
])
def test_create_validation_is_400(client, alice_headers, engine, body):
    response = client.post("/api/tasks", json=body, headers=alice_headers)

    assert response.status_code == 400
    assert "error" in response.json()
    assert count_tasks(engine) == 0


def test_malformed_json_is_400(client, alice_headers):
    response = client.post(
        "/api/tasks",
        content="{not json",
        headers={**alice_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/tasks"),
    ("POST", "/api/tasks"),
    ("GET", "/api/tasks/1"),
    ("PUT", "/api/tasks/1"),
    ("DELETE", "/api/tasks/1"),
])
def test_task_routes_require_token(client, method, path):
    response = client.request(method, path, json={"title": "x"})
    assert response.status_code == 401


def test_bad_token_blocks_before_validation(client):
    response = client.post("/api/tasks", json={}, headers={"Authorization": "Bearer junk"})
    assert response.status_code == 403


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_non_numeric_id_is_400(client, alice_headers, method):
    response = client.request(method, "/api/tasks/abc", json={"title": "x"}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task ID"}


def test_foreign_task_is_not_found(client, alice_headers, bob_headers, engine):
    bobs = create(client, bob_headers, title="Bob's secret", priority="high")

    get = client.get(f"/api/tasks/{bobs['id']}", headers=alice_headers)
    put = client.put(f"/api/tasks/{bobs['id']}", json={"title": "mine now"}, headers=alice_headers)
    delete = client.delete(f"/api/tasks/{bobs['id']}", headers=alice_headers)
    missing = client.get("/api/tasks/99999", headers=alice_headers)

    for response in (get, put, delete, missing):
        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}

    assert client.get("/api/tasks", headers=alice_headers).json()["count"] == 0
    assert count_tasks(engine) == 1
    still_there = client.get(f"/api/tasks/{bobs['id']}", headers=bob_headers).json()["task"]
    assert still_there["title"] == "Bob's secret"
    assert still_there["priority"] == "high"


def test_update_is_full_replace(client, alice_headers):
    task = create(
        client, alice_headers,
        title="Original", description="keep?", priority="low", status="completed", dueDate="2025-01-01",
    )

    response = client.put(f"/api/tasks/{task['id']}", json={"title": "Renamed"}, headers=alice_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task updated successfully"
    updated = body["task"]
    assert updated["id"] == task["id"]
    assert updated["title"] == "Renamed"
    assert updated["description"] is None
    assert updated["priority"] == "medium"
    assert updated["status"] == "pending"
    assert updated["dueDate"] is None
    assert updated["createdAt"] == task["createdAt"]
    assert datetime.fromisoformat(updated["updatedAt"]) >= datetime.fromisoformat(task["updatedAt"])


def test_update_validation_is_400(client, alice_headers):
    task = create(client, alice_headers, title="x")

    response = client.put(f"/api/tasks/{task['id']}", json={"title": "x", "priority": "max"}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Priority must be low, medium, or high"}


def test_delete_owned_task(client, alice_headers, engine):
    keep = create(client, alice_headers, title="Keep")
    drop = create(client, alice_headers, title="Drop")

    response = client.delete(f"/api/tasks/{drop['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}
    assert count_tasks(engine) == 1

    again = client.delete(f"/api/tasks/{drop['id']}", headers=alice_headers)
    assert again.status_code == 404
    assert [t["id"] for t in client.get("/api/tasks", headers=alice_headers).json()["tasks"]] == [keep["id"]]


@pytest.mark.parametrize("raw_id", ["1_0", " 5", "+5", "-1", "٥", "1.0"])
def test_id_must_be_plain_digits(client, alice_headers, raw_id):
    response = client.get(f"/api/tasks/{raw_id}", headers=alice_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task ID"}


@pytest.mark.parametrize("raw_id", ["0", "9223372036854775808", "99999999999999999999999"])
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_out_of_range_id_is_not_found(client, alice_headers, method, raw_id):
    response = client.request(method, f"/api/tasks/{raw_id}", json={"title": "x"}, headers=alice_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_overlong_title_is_400(client, alice_headers, engine):
    response = client.post("/api/tasks", json={"title": "t" * 256}, headers=alice_headers)
    assert response.status_code == 400
    assert count_tasks(engine) == 0


def test_task_handlers_run_in_threadpool():
    from todo_api.routers import tasks

    for handler in (tasks.list_tasks, tasks.create_task, tasks.get_task, tasks.update_task, tasks.delete_task):
        assert not inspect.iscoroutinefunction(handler), handler.__name__
