from datetime import datetime, timedelta


def _member(client, name="Mike Chen", email="mike@company.com", role="Developer"):
    r = client.post("/api/team-members", json={"name": name, "email": email, "role": role})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_task_applies_defaults(admin_client):
    r = admin_client.post("/api/tasks", json={"title": "Write release notes"})
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "todo"
    assert body["priority"] == "medium"
    assert body["actualHours"] == 0
    assert body["position"] == 0
    assert body["assignee"] is None
    assert body["category"] is None


def test_create_task_validation_errors(admin_client, storage):
    r = admin_client.post("/api/tasks", json={"description": "no title"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid data"
    assert any("title" in e["loc"] for e in r.json()["errors"])

    assert admin_client.post("/api/tasks", json={"title": "x", "status": "blocked"}).status_code == 400
    assert admin_client.post("/api/tasks", json={"title": "x", "priority": "critical"}).status_code == 400
    assert storage.tasks == {}
    assert storage.activities == {}


def test_task_lifecycle_scenario(admin_client):
    created = admin_client.post("/api/tasks", json={"title": "Write release notes"}).json()
    task_id = created["id"]

    r = admin_client.put(f"/api/tasks/{task_id}", json={"status": "completed"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["status"] == "completed"
    assert updated["updatedAt"] >= created["updatedAt"]

    activities = admin_client.get("/api/activities").json()
    assert [a["type"] for a in activities] == ["updated", "created"]
    assert activities[0]["description"] == "Task status changed to completed"
    assert activities[0]["taskId"] == task_id

    stats = admin_client.get("/api/dashboard/stats").json()
    assert stats == {"totalTasks": 1, "inProgress": 0, "completed": 1, "overdue": 0, "todo": 0}


def test_update_without_status_change_adds_no_activity(admin_client):
    task_id = admin_client.post("/api/tasks", json={"title": "Refactor"}).json()["id"]
    admin_client.put(f"/api/tasks/{task_id}", json={"priority": "high", "position": 3})
    admin_client.put(f"/api/tasks/{task_id}", json={"status": "todo"})
    activities = admin_client.get("/api/activities").json()
    assert [a["type"] for a in activities] == ["created"]


def test_update_rejects_null_for_required_fields(admin_client):
    task_id = admin_client.post("/api/tasks", json={"title": "Refactor"}).json()["id"]
    assert admin_client.put(f"/api/tasks/{task_id}", json={"title": None}).status_code == 400
    assert admin_client.put(f"/api/tasks/{task_id}", json={"dueDate": None}).status_code == 200


def test_missing_task_is_404(admin_client):
    assert admin_client.get("/api/tasks/999").status_code == 404
    assert admin_client.put("/api/tasks/999", json={"status": "todo"}).status_code == 404
    assert admin_client.delete("/api/tasks/999").status_code == 404


def test_get_single_task_is_open(admin_client, client):
    task_id = admin_client.post("/api/tasks", json={"title": "Public"}).json()["id"]
    r = client.get(f"/api/tasks/{task_id}")
    assert r.status_code == 200
    assert r.json()["title"] == "Public"


def test_delete_task(admin_client):
    task_id = admin_client.post("/api/tasks", json={"title": "Temp"}).json()["id"]
    assert admin_client.delete(f"/api/tasks/{task_id}").status_code == 204
    assert admin_client.get(f"/api/tasks/{task_id}").status_code == 404
    # Activity rows keep the dangling task id
    assert admin_client.get("/api/activities").json()[0]["taskId"] == task_id


def test_list_filters(admin_client):
    member = _member(admin_client)
    category = admin_client.post("/api/categories", json={"name": "Development", "color": "#10b981"}).json()
    admin_client.post("/api/tasks", json={"title": "A", "assigneeId": member["id"]})
    admin_client.post("/api/tasks", json={"title": "B", "categoryId": category["id"], "status": "in_progress"})
    admin_client.post("/api/tasks", json={"title": "C"})

    assert len(admin_client.get("/api/tasks").json()) == 3
    assert [t["title"] for t in admin_client.get("/api/tasks", params={"status": "in_progress"}).json()] == ["B"]
    by_member = admin_client.get("/api/tasks", params={"assigneeId": member["id"]}).json()
    assert [t["title"] for t in by_member] == ["A"]
    assert by_member[0]["assignee"]["name"] == "Mike Chen"
    by_category = admin_client.get("/api/tasks", params={"categoryId": category["id"]}).json()
    assert [t["title"] for t in by_category] == ["B"]
    assert by_category[0]["category"]["color"] == "#10b981"
    # status wins over the other filters
    both = admin_client.get("/api/tasks", params={"status": "todo", "categoryId": category["id"]}).json()
    assert sorted(t["title"] for t in both) == ["A", "C"]


def test_deleted_assignee_is_absent_not_an_error(admin_client):
    member = _member(admin_client)
    task_id = admin_client.post("/api/tasks", json={"title": "Orphan", "assigneeId": member["id"]}).json()["id"]
    assert admin_client.delete(f"/api/team-members/{member['id']}").status_code == 204
    r = admin_client.get(f"/api/tasks/{task_id}")
    assert r.status_code == 200
    assert r.json()["assigneeId"] == member["id"]
    assert r.json()["assignee"] is None


def test_overdue_in_dashboard(admin_client):
    past = (datetime.utcnow() - timedelta(days=2)).isoformat()
    admin_client.post("/api/tasks", json={"title": "Late", "dueDate": past})
    admin_client.post("/api/tasks", json={"title": "Late but done", "dueDate": past, "status": "completed"})
    stats = admin_client.get("/api/dashboard/stats").json()
    assert stats["overdue"] == 1
    assert stats["totalTasks"] == 2


def test_time_entries_increment_actual_hours(admin_client, client):
    member = _member(admin_client)
    task_id = admin_client.post("/api/tasks", json={"title": "Track me"}).json()["id"]
    r = client.post("/api/time-entries", json={"taskId": task_id, "memberId": member["id"], "hours": 5})
    assert r.status_code == 201
    assert r.json()["date"]
    client.post("/api/time-entries", json={"taskId": task_id, "memberId": member["id"], "hours": 3})
    assert admin_client.get(f"/api/tasks/{task_id}").json()["actualHours"] == 8
    assert len(client.get("/api/time-entries", params={"taskId": task_id}).json()) == 2


def test_time_entry_for_missing_task_is_still_stored(client):
    r = client.post("/api/time-entries", json={"taskId": 404, "memberId": 1, "hours": 2})
    assert r.status_code == 201
    assert [e["taskId"] for e in client.get("/api/time-entries").json()] == [404]


def test_activities_limit(admin_client):
    for i in range(5):
        admin_client.post("/api/tasks", json={"title": f"T{i}"})
    assert len(admin_client.get("/api/activities", params={"limit": 2}).json()) == 2
    assert len(admin_client.get("/api/activities").json()) == 5


def test_activities_zero_limit_uses_default(admin_client):
    for i in range(3):
        admin_client.post("/api/tasks", json={"title": f"T{i}"})
    assert len(admin_client.get("/api/activities", params={"limit": 0}).json()) == 3


def test_team_member_crud(admin_client):
    member = _member(admin_client)
    r = admin_client.put(f"/api/team-members/{member['id']}", json={"role": "Senior Developer"})
    assert r.status_code == 200
    assert r.json()["role"] == "Senior Developer"
    assert r.json()["email"] == "mike@company.com"
    assert admin_client.put("/api/team-members/999", json={"role": "x"}).status_code == 404
    assert admin_client.post(
        "/api/team-members", json={"name": "Dup", "email": "mike@company.com", "role": "x"}
    ).status_code == 409
    assert admin_client.post("/api/team-members", json={"name": "Bad", "email": "nope", "role": "x"}).status_code == 400
    assert admin_client.delete("/api/team-members/999").status_code == 404


def test_category_crud(admin_client):
    r = admin_client.post("/api/categories", json={"name": "Design"})
    assert r.status_code == 201
    category = r.json()
    assert category["color"] == "#3b82f6"
    assert category["parentId"] is None
    child = admin_client.post("/api/categories", json={"name": "Icons", "parentId": category["id"]}).json()
    assert child["parentId"] == category["id"]
    r = admin_client.put(f"/api/categories/{category['id']}", json={"color": "#8b5cf6"})
    assert r.json()["color"] == "#8b5cf6"
    assert admin_client.delete(f"/api/categories/{category['id']}").status_code == 204
    assert admin_client.delete(f"/api/categories/{category['id']}").status_code == 404
    assert [c["name"] for c in admin_client.get("/api/categories").json()] == ["Icons"]


def test_clear_all_resets_workspace(admin_client):
    _member(admin_client)
    admin_client.post("/api/categories", json={"name": "Design"})
    admin_client.post("/api/tasks", json={"title": "Gone soon"})
    r = admin_client.delete("/api/data/clear-all")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "All data cleared successfully"}

    members = admin_client.get("/api/team-members").json()
    assert [m["email"] for m in members] == [
        "zacchaeus@company.com",
        "glory@company.com",
        "fiyinfoluwa@company.com",
        "joseph@company.com",
    ]
    assert admin_client.get("/api/tasks").json() == []
    assert admin_client.get("/api/categories").json() == []
    assert admin_client.get("/api/activities").json() == []
    # Users survive
    assert admin_client.get("/api/auth/user").status_code == 200


def test_analytics_require_session(client, guest_client):
    assert client.get("/api/analytics/tasks").status_code == 401
    for path in (
        "tasks",
        "team-performance",
        "categories",
        "productivity-trends",
        "time-tracking",
        "workload-distribution",
    ):
        assert guest_client.get(f"/api/analytics/{path}").status_code == 200


def test_health_and_request_id(client):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.status_code == 200
    assert r.headers["X-Request-ID"] == "abc-123"
