from datetime import timedelta

from stack_assist.core.clock import utcnow
from stack_assist.models.task import Task

TASK_CLOCK = "stack_assist.services.task_service.utcnow"


def create_task(client, headers, title="Renew SSL", **fields):
    response = client.post("/api/tasks", json={"title": title, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_new_task_starts_in_todo(client, owner_a_headers):
    task = create_task(client, owner_a_headers, priority="high", due_date="2030-01-01")

    assert task["status"] == "todo"
    assert task["priority"] == "high"
    assert [h["status"] for h in task["status_history"]] == ["todo"]


def test_status_change_appends_history(client, owner_a_headers):
    task = create_task(client, owner_a_headers)
    url = f"/api/tasks/{task['id']}"

    client.patch(url, json={"status": "in-progress"}, headers=owner_a_headers)
    response = client.patch(url, json={"status": "completed"}, headers=owner_a_headers)

    assert response.status_code == 200
    history = [h["status"] for h in response.json()["status_history"]]
    assert history == ["todo", "in-progress", "completed"]


def test_same_status_does_not_append_history(client, owner_a_headers):
    task = create_task(client, owner_a_headers)

    response = client.patch(
        f"/api/tasks/{task['id']}", json={"status": "todo", "title": "Renamed"}, headers=owner_a_headers
    )

    assert response.json()["title"] == "Renamed"
    assert len(response.json()["status_history"]) == 1


def test_filter_tasks_by_status(client, owner_a_headers):
    create_task(client, owner_a_headers, title="one")
    second = create_task(client, owner_a_headers, title="two")
    client.patch(f"/api/tasks/{second['id']}", json={"status": "completed"}, headers=owner_a_headers)

    data = client.get("/api/tasks", params={"status": "completed"}, headers=owner_a_headers).json()

    assert data["total"] == 1
    assert data["tasks"][0]["title"] == "two"


def test_task_report(client, db_session, owner_a_headers, monkeypatch):
    start = utcnow()
    monkeypatch.setattr(TASK_CLOCK, lambda: start)
    first = create_task(client, owner_a_headers, title="one", priority="high")
    create_task(client, owner_a_headers, title="two", priority="low")

    url = f"/api/tasks/{first['id']}"
    monkeypatch.setattr(TASK_CLOCK, lambda: start + timedelta(days=1))
    client.patch(url, json={"status": "in-progress"}, headers=owner_a_headers)
    monkeypatch.setattr(TASK_CLOCK, lambda: start + timedelta(days=3, hours=1))
    client.patch(url, json={"status": "completed"}, headers=owner_a_headers)

    # Measure completion from the task's creation time
    db_session.query(Task).filter(Task.id == first["id"]).one().created_at = start
    db_session.commit()

    report = client.get("/api/tasks/report", headers=owner_a_headers).json()

    assert report["total"] == 2
    assert report["completed"] == 1
    assert report["by_status"] == {"todo": 1, "in-progress": 0, "completed": 1}
    assert report["by_priority"] == {"low": 1, "medium": 0, "high": 1}
    assert report["average_completion_days"] == 3
    assert report["status_changes"] == 2


def test_tasks_isolated_between_tenants(client, owner_a_headers, owner_b_headers):
    task = create_task(client, owner_a_headers)
    url = f"/api/tasks/{task['id']}"

    assert client.get("/api/tasks", headers=owner_b_headers).json()["total"] == 0
    assert client.get(url, headers=owner_b_headers).status_code == 404
    assert client.patch(url, json={"title": "x"}, headers=owner_b_headers).status_code == 404
    assert client.delete(url, headers=owner_b_headers).status_code == 404
    assert client.get("/api/tasks/report", headers=owner_b_headers).json()["total"] == 0
    assert client.delete(url, headers=owner_a_headers).status_code == 204
