# tests/test_routes.py


def _post_task(client, title, **extra):
    resp = client.post("/api/v1/tasks", json={"title": title, "priority": "High", **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health_check(client):
    assert client.get("/api/v1/health-check").json() == {"status": "ok"}


def test_seeded_categories_are_listed_by_name(client):
    resp = client.get("/api/v1/categories")

    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Other", "Personal", "Tech Guild", "Work"]


def test_category_crud(client):
    created = client.post("/api/v1/categories", json={"name": "Garden", "color": "#22aa22"})
    assert created.status_code == 201
    cat_id = created.json()["id"]

    updated = client.put(f"/api/v1/categories/{cat_id}", json={"color": "#33bb33"})
    assert updated.status_code == 200
    assert updated.json()["color"] == "#33bb33"

    assert client.delete(f"/api/v1/categories/{cat_id}").status_code == 204
    assert "Garden" not in [c["name"] for c in client.get("/api/v1/categories").json()]


def test_duplicate_category_error_shape(client):
    resp = client.post("/api/v1/categories", json={"name": "Work", "color": "#000000"})

    assert resp.status_code == 500
    assert resp.json()["type"] == "DatabaseError"
    assert resp.json()["message"]


def test_task_flow(client):
    parent = _post_task(client, "Parent")
    child1 = _post_task(client, "Child1", parent_id=parent["id"])
    child2 = _post_task(client, "Child2", parent_id=parent["id"])

    tree = client.get("/api/v1/tasks/tree").json()
    assert len(tree) == 1
    assert tree[0]["title"] == "Parent"
    assert [s["id"] for s in tree[0]["subtasks"]] == [child1["id"], child2["id"]]

    resp = client.post(f"/api/v1/tasks/{child2['id']}/reorder", json={"new_position": 0})
    assert resp.status_code == 204
    tree = client.get("/api/v1/tasks/tree").json()
    assert [s["id"] for s in tree[0]["subtasks"]] == [child2["id"], child1["id"]]

    done = client.put(f"/api/v1/tasks/{child1['id']}", json={"is_done": True}).json()
    assert done["is_done"] is True
    assert done["completed_at"] is not None

    assert client.delete(f"/api/v1/tasks/{parent['id']}").status_code == 204
    assert client.get("/api/v1/tasks").json() == []


def test_validation_error_shape(client):
    resp = client.post("/api/v1/tasks", json={"title": "   ", "priority": "Low"})

    assert resp.status_code == 422
    assert resp.json() == {"type": "ValidationError", "message": "Title cannot be empty"}


def test_invalid_input_shape(client):
    resp = client.post("/api/v1/tasks", json={"title": "x", "priority": "Whenever"})

    assert resp.status_code == 400
    assert resp.json()["type"] == "InvalidInput"


def test_non_object_body_is_invalid_input(client):
    resp = client.post("/api/v1/tasks", json=["x"])

    assert resp.status_code == 400
    assert resp.json()["type"] == "InvalidInput"


def test_not_found_shape(client):
    resp = client.put("/api/v1/tasks/999", json={"title": "ghost"})

    assert resp.status_code == 404
    assert resp.json() == {"type": "NotFound", "message": "Task 999 not found"}


def test_reorder_missing_body_field(client):
    task = _post_task(client, "A")
    resp = client.post(f"/api/v1/tasks/{task['id']}/reorder", json={})

    assert resp.status_code == 400
    assert resp.json()["type"] == "InvalidInput"
