"""HTTP 계층의 라우팅과 도메인 예외 → 상태 코드 매핑을 검증합니다."""

from estimator.errors import TransientStoreError
from estimator.main import app
from estimator.services.estimator_service import get_estimator
from tests.conftest import override_get_estimator


def _create_task_type(client, name, min_hours, max_hours, category=None):
    resp = client.post("/api/task-types", json={
        "name": name,
        "default_min_hours": min_hours,
        "default_max_hours": max_hours,
        "category": category,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_demo_scenario_over_http(client):
    screen = _create_task_type(client, "Large Complex Web Screen", 8, 16, "Frontend")
    api = _create_task_type(client, "API Endpoint", 2, 4, "Backend")

    resp = client.post("/api/projects", json={"name": "Demo"})
    assert resp.status_code == 201
    project_id = resp.json()["id"]

    for task_type, quantity in ((screen, 5), (api, 12)):
        resp = client.post(f"/api/projects/{project_id}/tasks", json={
            "task_type_id": task_type["id"], "quantity": quantity,
        })
        assert resp.status_code == 201, resp.text

    estimate = client.get(f"/api/projects/{project_id}/estimate").json()
    assert estimate["total_min_hours"] == 64
    assert estimate["total_max_hours"] == 128
    assert [e["task_type_name"] for e in estimate["task_breakdown"]] == ["API Endpoint", "Large Complex Web Screen"]

    detail = client.get(f"/api/projects/{project_id}").json()
    assert detail["total_min_hours"] == 64
    assert len(detail["tasks"]) == 2

    assert client.post(f"/api/projects/{project_id}/estimate").status_code == 200


def test_error_mapping(client):
    api = _create_task_type(client, "API Endpoint", 2, 4)
    project_id = client.post("/api/projects", json={"name": "Errors"}).json()["id"]

    resp = client.post("/api/task-types", json={"name": "Bad", "default_min_hours": 5, "default_max_hours": 1})
    assert resp.status_code == 400
    assert "detail" in resp.json()

    assert client.get("/api/projects/missing").status_code == 404
    assert client.get("/api/projects/missing/estimate").status_code == 404
    assert client.get("/api/task-types/missing").status_code == 404

    assert client.post("/api/task-types", json={
        "name": "API Endpoint", "default_min_hours": 1, "default_max_hours": 2,
    }).status_code == 409

    body = {"task_type_id": api["id"], "quantity": 1}
    assert client.post(f"/api/projects/{project_id}/tasks", json=body).status_code == 201
    assert client.post(f"/api/projects/{project_id}/tasks", json=body).status_code == 409
    assert client.delete(f"/api/task-types/{api['id']}").status_code == 409

    # 요청 스키마 자체가 틀리면 FastAPI 기본 422
    assert client.post(f"/api/projects/{project_id}/tasks", json={"quantity": 1}).status_code == 422


def test_transient_exhaustion_maps_to_503(client):
    class _Unavailable:
        def get_project(self, project_id):
            raise TransientStoreError("database is locked")

    app.dependency_overrides[get_estimator] = lambda: _Unavailable()
    try:
        assert client.get("/api/projects/any").status_code == 503
    finally:
        app.dependency_overrides[get_estimator] = override_get_estimator


def test_task_and_task_type_lifecycle(client):
    widget = _create_task_type(client, "Widget", 2, 4, "Frontend")
    project_id = client.post("/api/projects", json={"name": "Lifecycle"}).json()["id"]
    task = client.post(f"/api/projects/{project_id}/tasks", json={
        "task_type_id": widget["id"], "quantity": 2,
    }).json()
    assert task["effective_min_hours"] == 2

    resp = client.put(f"/api/projects/{project_id}/tasks/{task['id']}", json={"custom_min_hours": 3})
    assert resp.status_code == 200
    assert client.get(f"/api/projects/{project_id}").json()["total_min_hours"] == 6

    resp = client.put(f"/api/task-types/{widget['id']}", json={"default_max_hours": 10})
    assert resp.status_code == 200
    assert client.get(f"/api/projects/{project_id}").json()["total_max_hours"] == 20

    resp = client.put("/api/task-types", json=[{"id": widget["id"], "default_max_hours": 12}])
    assert resp.status_code == 200
    assert client.get(f"/api/projects/{project_id}").json()["total_max_hours"] == 24

    assert client.get(f"/api/projects/{project_id}/tasks").json()[0]["id"] == task["id"]
    assert client.delete(f"/api/projects/{project_id}/tasks/{task['id']}").status_code == 200
    assert client.get(f"/api/projects/{project_id}").json()["total_max_hours"] == 0
    assert client.delete(f"/api/task-types/{widget['id']}").status_code == 200
    assert client.get("/api/task-types/categories").json() == []


def test_update_project_over_http(client):
    api = _create_task_type(client, "API Endpoint", 2, 4)
    project_id = client.post("/api/projects", json={"name": "Put"}).json()["id"]

    resp = client.put(f"/api/projects/{project_id}", json={"status": "ACTIVE"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ACTIVE"

    resp = client.put(f"/api/projects/{project_id}", json={
        "task_updates": [{"task_type_id": api["id"], "quantity": 3}],
    })
    assert resp.status_code == 200
    assert resp.json()["total_max_hours"] == 12

    assert client.put(f"/api/projects/{project_id}", json={"status": "UNKNOWN"}).status_code == 422
    assert client.delete(f"/api/projects/{project_id}").status_code == 200
    assert client.get("/api/projects").json()["pagination"]["total"] == 0


def test_health_check(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
