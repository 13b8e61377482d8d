"""
In-process storage provider.
Keeps every table in a dict keyed by id; used for tests and throwaway demos.
"""
import threading
from datetime import datetime
from typing import Dict, List, Optional

from ..schemas.auth import UserRecord
from ..schemas.tasks import Activity, Task, TaskWithDetails, TimeEntry
from ..schemas.team import Category, TeamMember
from .provider import DuplicateRecordError, StorageProvider


class MemoryStorageProvider(StorageProvider):
    def __init__(self):
        self._lock = threading.RLock()
        self.users: Dict[str, UserRecord] = {}
        self.team_members: Dict[int, TeamMember] = {}
        self.categories: Dict[int, Category] = {}
        self.tasks: Dict[int, Task] = {}
        self.time_entries: Dict[int, TimeEntry] = {}
        self.activities: Dict[int, Activity] = {}
        # Ids are never reused, even after clear_all
        self._next_id = {
            "team_members": 1,
            "categories": 1,
            "tasks": 1,
            "time_entries": 1,
            "activities": 1,
        }

    def _allocate_id(self, table: str) -> int:
        value = self._next_id[table]
        self._next_id[table] = value + 1
        return value

    # Users
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return next((u for u in self.users.values() if u.username == username), None)

    def upsert_user(self, data: dict) -> UserRecord:
        with self._lock:
            user_id = data["id"]
            username = data.get("username")
            if username and any(u.username == username and u.id != user_id for u in self.users.values()):
                raise DuplicateRecordError(f"username {username!r} already exists")
            now = datetime.utcnow()
            existing = self.users.get(user_id)
            if existing:
                user = existing.model_copy(update={**data, "updated_at": now})
            else:
                user = UserRecord(**{**data, "created_at": now, "updated_at": now})
            self.users[user_id] = user
            return user

    # Team members
    def _check_member_email(self, email: Optional[str], member_id: Optional[int] = None) -> None:
        if email and any(m.email == email and m.id != member_id for m in self.team_members.values()):
            raise DuplicateRecordError(f"team member email {email!r} already exists")

    def list_team_members(self) -> List[TeamMember]:
        return list(self.team_members.values())

    def get_team_member(self, member_id: int) -> Optional[TeamMember]:
        return self.team_members.get(member_id)

    def create_team_member(self, data: dict) -> TeamMember:
        with self._lock:
            self._check_member_email(data.get("email"))
            member = TeamMember(id=self._allocate_id("team_members"), **data)
            self.team_members[member.id] = member
            return member

    def update_team_member(self, member_id: int, data: dict) -> Optional[TeamMember]:
        with self._lock:
            existing = self.team_members.get(member_id)
            if not existing:
                return None
            self._check_member_email(data.get("email"), member_id)
            updated = existing.model_copy(update=data)
            self.team_members[member_id] = updated
            return updated

    def delete_team_member(self, member_id: int) -> bool:
        with self._lock:
            return self.team_members.pop(member_id, None) is not None

    # Categories
    def list_categories(self) -> List[Category]:
        return list(self.categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def create_category(self, data: dict) -> Category:
        with self._lock:
            category = Category(id=self._allocate_id("categories"), **data)
            self.categories[category.id] = category
            return category

    def update_category(self, category_id: int, data: dict) -> Optional[Category]:
        with self._lock:
            existing = self.categories.get(category_id)
            if not existing:
                return None
            updated = existing.model_copy(update=data)
            self.categories[category_id] = updated
            return updated

    def delete_category(self, category_id: int) -> bool:
        with self._lock:
            return self.categories.pop(category_id, None) is not None

    # Tasks
    def _enrich(self, task: Task) -> TaskWithDetails:
        assignee = self.team_members.get(task.assignee_id) if task.assignee_id else None
        category = self.categories.get(task.category_id) if task.category_id else None
        return TaskWithDetails(**task.model_dump(), assignee=assignee, category=category)

    def list_tasks(
        self,
        status: Optional[str] = None,
        assignee_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[TaskWithDetails]:
        tasks = list(self.tasks.values())
        if status:
            tasks = [t for t in tasks if t.status == status]
        elif assignee_id is not None:
            tasks = [t for t in tasks if t.assignee_id == assignee_id]
        elif category_id is not None:
            tasks = [t for t in tasks if t.category_id == category_id]
        return [self._enrich(t) for t in tasks]

    def get_task(self, task_id: int) -> Optional[TaskWithDetails]:
        task = self.tasks.get(task_id)
        return self._enrich(task) if task else None

    def insert_task(self, data: dict) -> TaskWithDetails:
        with self._lock:
            now = datetime.utcnow()
            values = {"created_at": now, "updated_at": now, **data}
            task = Task(id=self._allocate_id("tasks"), **values)
            self.tasks[task.id] = task
            return self._enrich(task)

    def update_task(self, task_id: int, data: dict) -> Optional[TaskWithDetails]:
        with self._lock:
            existing = self.tasks.get(task_id)
            if not existing:
                return None
            updated = existing.model_copy(update=data)
            self.tasks[task_id] = updated
            return self._enrich(updated)

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            return self.tasks.pop(task_id, None) is not None

    def add_task_hours(self, task_id: int, hours: float) -> None:
        with self._lock:
            task = self.tasks.get(task_id)
            if task is None:
                return
            self.tasks[task_id] = task.model_copy(update={"actual_hours": (task.actual_hours or 0) + hours})

    # Time entries
    def list_time_entries(self, task_id: Optional[int] = None) -> List[TimeEntry]:
        entries = list(self.time_entries.values())
        if task_id is not None:
            entries = [e for e in entries if e.task_id == task_id]
        return entries

    def insert_time_entry(self, data: dict) -> TimeEntry:
        with self._lock:
            values = {"date": datetime.utcnow(), **data}
            entry = TimeEntry(id=self._allocate_id("time_entries"), **values)
            self.time_entries[entry.id] = entry
            return entry

    # Activities
    def list_activities(self, limit: int = 50) -> List[Activity]:
        ordered = sorted(self.activities.values(), key=lambda a: (a.created_at, a.id), reverse=True)
        return ordered[:limit]

    def insert_activity(self, data: dict) -> Activity:
        with self._lock:
            values = {"created_at": datetime.utcnow(), **data}
            activity = Activity(id=self._allocate_id("activities"), **values)
            self.activities[activity.id] = activity
            return activity

    def clear_all(self) -> None:
        with self._lock:
            self.time_entries.clear()
            self.activities.clear()
            self.tasks.clear()
            self.categories.clear()
            self.team_members.clear()
