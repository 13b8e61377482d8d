from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import CamelModel, naive_utc
from .team import Category, TeamMember


TaskStatus = Literal["todo", "in_progress", "completed"]
TaskPriority = Literal["low", "medium", "high", "urgent"]

TASK_STATUSES = ("todo", "in_progress", "completed")
TASK_PRIORITIES = ("low", "medium", "high", "urgent")


class TaskCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    assignee_id: Optional[int] = None
    category_id: Optional[int] = None
    position: int = 0

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, v):
        return naive_utc(v)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    assignee_id: Optional[int] = None
    category_id: Optional[int] = None
    position: Optional[int] = None

    @field_validator("title", "status", "priority", "actual_hours", "position")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, v):
        return naive_utc(v)


class Task(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str = "todo"
    priority: str = "medium"
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    actual_hours: float = 0
    assignee_id: Optional[int] = None
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    position: int = 0


class TaskWithDetails(Task):
    assignee: Optional[TeamMember] = None
    category: Optional[Category] = None


class TimeEntryCreate(CamelModel):
    task_id: int
    member_id: int
    hours: float
    description: Optional[str] = None


class TimeEntry(CamelModel):
    id: int
    task_id: int
    member_id: int
    hours: float
    description: Optional[str] = None
    date: datetime


class Activity(CamelModel):
    id: int
    type: str
    task_id: Optional[int] = None
    member_id: Optional[int] = None
    description: str
    created_at: datetime
