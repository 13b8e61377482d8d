"""
Read-only reporting over tasks, team members, categories and time entries.

Every function loads the rows it needs from the storage provider and folds them
in Python, so both storage backends return the same numbers. `now` is a naive
UTC datetime and defaults to the current time.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from ..schemas.analytics import (
    CategoryAnalytics,
    DashboardStats,
    ProductivityTrend,
    StatusAnalytics,
    TeamPerformance,
    TimeTracking,
    Workload,
)
from ..schemas.tasks import TASK_STATUSES, Task
from ..storage.provider import StorageProvider


TIME_TRACKING_WINDOW_DAYS = 30
PRODUCTIVITY_WINDOW_WEEKS = 12
HIGH_PRIORITIES = ("high", "urgent")


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.utcnow()


def week_start(moment: datetime) -> date:
    """Monday of the week containing `moment`."""
    day = moment.date()
    return day - timedelta(days=day.weekday())


def is_overdue(task: Task, now: datetime) -> bool:
    return bool(task.due_date and task.due_date < now and task.status != "completed")


def completion_rate(completed: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(completed / total * 100, 2)


def _by_assignee(tasks: Iterable[Task]) -> Dict[int, List[Task]]:
    grouped: Dict[int, List[Task]] = defaultdict(list)
    for task in tasks:
        if task.assignee_id is not None:
            grouped[task.assignee_id].append(task)
    return grouped


def dashboard_stats(storage: StorageProvider, now: Optional[datetime] = None) -> DashboardStats:
    now = _now(now)
    tasks = storage.list_tasks()
    return DashboardStats(
        total_tasks=len(tasks),
        in_progress=sum(1 for t in tasks if t.status == "in_progress"),
        completed=sum(1 for t in tasks if t.status == "completed"),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        todo=sum(1 for t in tasks if t.status == "todo"),
    )


def status_analytics(storage: StorageProvider, now: Optional[datetime] = None) -> List[StatusAnalytics]:
    now = _now(now)
    tasks = storage.list_tasks()
    rows = []
    for status in TASK_STATUSES:
        in_status = [t for t in tasks if t.status == status]
        rows.append(
            StatusAnalytics(
                status=status,
                count=len(in_status),
                overdue_count=sum(1 for t in in_status if is_overdue(t, now)),
            )
        )
    return rows


def team_performance(storage: StorageProvider, now: Optional[datetime] = None) -> List[TeamPerformance]:
    now = _now(now)
    assigned = _by_assignee(storage.list_tasks())
    rows = []
    for member in storage.list_team_members():
        tasks = assigned.get(member.id, [])
        completed = sum(1 for t in tasks if t.status == "completed")
        rows.append(
            TeamPerformance(
                id=member.id,
                name=member.name,
                role=member.role,
                total_tasks=len(tasks),
                completed_tasks=completed,
                overdue_tasks=sum(1 for t in tasks if is_overdue(t, now)),
                completion_rate=completion_rate(completed, len(tasks)),
            )
        )
    return rows


def category_analytics(storage: StorageProvider) -> List[CategoryAnalytics]:
    tasks = storage.list_tasks()
    by_category: Dict[int, List[Task]] = defaultdict(list)
    for task in tasks:
        if task.category_id is not None:
            by_category[task.category_id].append(task)
    rows = []
    for category in storage.list_categories():
        in_category = by_category.get(category.id, [])
        completed = [t for t in in_category if t.status == "completed"]
        avg_hours = None
        if completed:
            total_seconds = sum((t.updated_at - t.created_at).total_seconds() for t in completed)
            avg_hours = round(total_seconds / len(completed) / 3600, 2)
        rows.append(
            CategoryAnalytics(
                id=category.id,
                category_name=category.name,
                color=category.color,
                task_count=len(in_category),
                completed_tasks=len(completed),
                avg_completion_hours=avg_hours,
            )
        )
    return rows


def time_tracking(storage: StorageProvider, now: Optional[datetime] = None) -> List[TimeTracking]:
    now = _now(now)
    since = now - timedelta(days=TIME_TRACKING_WINDOW_DAYS)
    members = {m.id: m for m in storage.list_team_members()}
    totals: Dict[Tuple[date, int], float] = defaultdict(float)
    for entry in storage.list_time_entries():
        if entry.member_id not in members:
            continue
        if entry.date < since or entry.date > now:
            continue
        totals[(week_start(entry.date), entry.member_id)] += entry.hours
    rows = [
        TimeTracking(
            week_start=week,
            member_id=member_id,
            team_member=members[member_id].name,
            total_hours=hours,
        )
        for (week, member_id), hours in totals.items()
    ]
    rows.sort(key=lambda r: (r.week_start, r.team_member))
    return rows


def productivity_trends(storage: StorageProvider, now: Optional[datetime] = None) -> List[ProductivityTrend]:
    """Created/completed counts for each of the trailing twelve weeks, oldest first."""
    now = _now(now)
    current = week_start(now)
    weeks = [current - timedelta(weeks=n) for n in range(PRODUCTIVITY_WINDOW_WEEKS - 1, -1, -1)]
    created: Dict[date, int] = defaultdict(int)
    completed: Dict[date, int] = defaultdict(int)
    for task in storage.list_tasks():
        created[week_start(task.created_at)] += 1
        if task.status == "completed":
            completed[week_start(task.updated_at)] += 1
    return [
        ProductivityTrend(week_start=week, tasks_created=created[week], tasks_completed=completed[week])
        for week in weeks
    ]


def workload_distribution(storage: StorageProvider, now: Optional[datetime] = None) -> List[Workload]:
    now = _now(now)
    assigned = _by_assignee(storage.list_tasks())
    rows = []
    for member in storage.list_team_members():
        tasks = assigned.get(member.id, [])
        open_tasks = [t for t in tasks if t.status != "completed"]
        rows.append(
            Workload(
                id=member.id,
                name=member.name,
                role=member.role,
                pending_tasks=sum(1 for t in tasks if t.status == "todo"),
                active_tasks=sum(1 for t in tasks if t.status == "in_progress"),
                high_priority_tasks=sum(1 for t in open_tasks if t.priority in HIGH_PRIORITIES),
                overdue_tasks=sum(1 for t in tasks if is_overdue(t, now)),
            )
        )
    return rows
