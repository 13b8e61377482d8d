from datetime import date, datetime, timedelta

from taskflow.services import analytics


NOW = datetime(2025, 3, 12, 12, 0, 0)  # a Wednesday


def _task(storage, title, created_at=NOW, updated_at=None, **fields):
    data = {
        "title": title,
        "status": "todo",
        "priority": "medium",
        "actual_hours": 0,
        "position": 0,
        "created_at": created_at,
        "updated_at": updated_at or created_at,
    }
    data.update(fields)
    return storage.insert_task(data)


def _member(storage, name, email):
    return storage.create_team_member({"name": name, "email": email, "role": "Developer"})


def test_week_start_is_monday():
    assert analytics.week_start(NOW) == date(2025, 3, 10)
    assert analytics.week_start(datetime(2025, 3, 10, 0, 0)) == date(2025, 3, 10)
    assert analytics.week_start(datetime(2025, 3, 16, 23, 59)) == date(2025, 3, 10)


def test_completion_rate_never_divides_by_zero():
    assert analytics.completion_rate(0, 0) == 0
    assert analytics.completion_rate(1, 3) == 33.33
    assert analytics.completion_rate(2, 2) == 100


def test_dashboard_stats(any_storage):
    _task(any_storage, "a")
    _task(any_storage, "b", status="in_progress", due_date=NOW - timedelta(days=1))
    _task(any_storage, "c", status="completed", due_date=NOW - timedelta(days=1))
    stats = analytics.dashboard_stats(any_storage, now=NOW)
    assert stats.total_tasks == 3
    assert stats.todo == 1
    assert stats.in_progress == 1
    assert stats.completed == 1
    assert stats.overdue == 1


def test_status_analytics(any_storage):
    _task(any_storage, "late", due_date=NOW - timedelta(hours=1))
    _task(any_storage, "fine", due_date=NOW + timedelta(days=1))
    _task(any_storage, "done", status="completed", due_date=NOW - timedelta(days=3))
    rows = {r.status: r for r in analytics.status_analytics(any_storage, now=NOW)}
    assert list(rows) == ["todo", "in_progress", "completed"]
    assert (rows["todo"].count, rows["todo"].overdue_count) == (2, 1)
    assert (rows["in_progress"].count, rows["in_progress"].overdue_count) == (0, 0)
    assert (rows["completed"].count, rows["completed"].overdue_count) == (1, 0)


def test_team_performance(any_storage):
    busy = _member(any_storage, "Busy", "busy@company.com")
    idle = _member(any_storage, "Idle", "idle@company.com")
    _task(any_storage, "1", assignee_id=busy.id, status="completed")
    _task(any_storage, "2", assignee_id=busy.id)
    _task(any_storage, "3", assignee_id=busy.id, due_date=NOW - timedelta(days=1))
    rows = {r.name: r for r in analytics.team_performance(any_storage, now=NOW)}
    assert rows["Busy"].total_tasks == 3
    assert rows["Busy"].completed_tasks == 1
    assert rows["Busy"].overdue_tasks == 1
    assert rows["Busy"].completion_rate == 33.33
    assert rows["Idle"].total_tasks == 0
    assert rows["Idle"].completion_rate == 0
    assert rows["Idle"].id == idle.id


def test_category_analytics(any_storage):
    design = any_storage.create_category({"name": "Design", "parent_id": None, "color": "#8b5cf6"})
    empty = any_storage.create_category({"name": "Empty", "parent_id": None, "color": "#000000"})
    _task(any_storage, "a", category_id=design.id, status="completed",
          created_at=NOW - timedelta(hours=10), updated_at=NOW)
    _task(any_storage, "b", category_id=design.id, status="completed",
          created_at=NOW - timedelta(hours=20), updated_at=NOW)
    _task(any_storage, "c", category_id=design.id)
    rows = {r.category_name: r for r in analytics.category_analytics(any_storage)}
    assert rows["Design"].task_count == 3
    assert rows["Design"].completed_tasks == 2
    assert rows["Design"].avg_completion_hours == 15
    assert rows["Design"].color == "#8b5cf6"
    assert rows["Empty"].task_count == 0
    assert rows["Empty"].avg_completion_hours is None
    assert rows["Empty"].id == empty.id


def test_time_tracking_window(any_storage):
    alex = _member(any_storage, "Alex", "alex@company.com")
    lisa = _member(any_storage, "Lisa", "lisa@company.com")
    for member_id, hours, days_ago in [
        (alex.id, 2, 0),
        (alex.id, 3, 1),   # same week as NOW
        (alex.id, 4, 7),   # previous week
        (lisa.id, 1, 2),
        (lisa.id, 8, 45),  # outside the window
        (999, 5, 1),       # unknown member
    ]:
        any_storage.insert_time_entry(
            {"task_id": 1, "member_id": member_id, "hours": hours, "date": NOW - timedelta(days=days_ago)}
        )
    rows = analytics.time_tracking(any_storage, now=NOW)
    summary = [(r.week_start, r.team_member, r.total_hours) for r in rows]
    assert summary == [
        (date(2025, 3, 3), "Alex", 4),
        (date(2025, 3, 10), "Alex", 5),
        (date(2025, 3, 10), "Lisa", 1),
    ]


def test_productivity_trends(any_storage):
    _task(any_storage, "this week", created_at=NOW - timedelta(days=1))
    _task(any_storage, "done last week", status="completed",
          created_at=NOW - timedelta(days=20), updated_at=NOW - timedelta(days=7))
    _task(any_storage, "ancient", created_at=NOW - timedelta(weeks=30))
    rows = analytics.productivity_trends(any_storage, now=NOW)
    assert len(rows) == 12
    assert rows[-1].week_start == date(2025, 3, 10)
    assert rows[0].week_start == date(2024, 12, 23)
    by_week = {r.week_start: r for r in rows}
    assert by_week[date(2025, 3, 10)].tasks_created == 1
    assert by_week[date(2025, 3, 3)].tasks_completed == 1
    assert by_week[date(2025, 2, 17)].tasks_created == 1
    assert sum(r.tasks_created for r in rows) == 2


def test_workload_distribution(any_storage):
    dev = _member(any_storage, "Dev", "dev@company.com")
    _task(any_storage, "p1", assignee_id=dev.id, priority="urgent")
    _task(any_storage, "p2", assignee_id=dev.id, due_date=NOW - timedelta(days=1))
    _task(any_storage, "a1", assignee_id=dev.id, status="in_progress", priority="high")
    _task(any_storage, "c1", assignee_id=dev.id, status="completed", priority="high")
    [row] = analytics.workload_distribution(any_storage, now=NOW)
    assert row.pending_tasks == 2
    assert row.active_tasks == 1
    assert row.high_priority_tasks == 2
    assert row.overdue_tasks == 1
