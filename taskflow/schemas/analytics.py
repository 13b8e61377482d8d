from datetime import date
from typing import Optional

from pydantic import BaseModel

from .base import CamelModel


class DashboardStats(CamelModel):
    total_tasks: int
    in_progress: int
    completed: int
    overdue: int
    todo: int


# Analytics rows keep snake_case keys on the wire


class StatusAnalytics(BaseModel):
    status: str
    count: int
    overdue_count: int


class TeamPerformance(BaseModel):
    id: int
    name: str
    role: str
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    completion_rate: float


class CategoryAnalytics(BaseModel):
    id: int
    category_name: str
    color: str
    task_count: int
    completed_tasks: int
    avg_completion_hours: Optional[float] = None


class TimeTracking(BaseModel):
    week_start: date
    member_id: int
    team_member: str
    total_hours: float


class ProductivityTrend(BaseModel):
    week_start: date
    tasks_created: int
    tasks_completed: int


class Workload(BaseModel):
    id: int
    name: str
    role: str
    pending_tasks: int
    active_tasks: int
    high_priority_tasks: int
    overdue_tasks: int
