from datetime import datetime
from typing import List, Optional

from ..schemas.tasks import TaskCreate, TaskUpdate, TaskWithDetails, TimeEntry, TimeEntryCreate
from ..storage.provider import StorageProvider
from .activity import record_activity


def create_task(storage: StorageProvider, payload: TaskCreate) -> TaskWithDetails:
    data = payload.model_dump()
    data["actual_hours"] = 0
    task = storage.insert_task(data)
    # Separate write; a failure here leaves the task without its activity
    record_activity(
        storage,
        type="created",
        task_id=task.id,
        member_id=task.assignee_id,
        description=f'Task "{task.title}" was created',
    )
    return task


def update_task(storage: StorageProvider, task_id: int, payload: TaskUpdate) -> Optional[TaskWithDetails]:
    existing = storage.get_task(task_id)
    if existing is None:
        return None
    changes = payload.model_dump(exclude_unset=True)
    changes["updated_at"] = datetime.utcnow()
    task = storage.update_task(task_id, changes)
    if task is None:
        return None
    new_status = changes.get("status")
    if new_status and new_status != existing.status:
        record_activity(
            storage,
            type="updated",
            task_id=task.id,
            member_id=task.assignee_id,
            description=f"Task status changed to {new_status}",
        )
    return task


def delete_task(storage: StorageProvider, task_id: int) -> bool:
    # Time entries and activities pointing at the task are left in place
    return storage.delete_task(task_id)


def list_tasks(
    storage: StorageProvider,
    status: Optional[str] = None,
    assignee_id: Optional[int] = None,
    category_id: Optional[int] = None,
) -> List[TaskWithDetails]:
    """Only one filter applies, checked in the order status, assignee, category."""
    if status:
        return storage.list_tasks(status=status)
    if assignee_id is not None:
        return storage.list_tasks(assignee_id=assignee_id)
    if category_id is not None:
        return storage.list_tasks(category_id=category_id)
    return storage.list_tasks()


def get_task(storage: StorageProvider, task_id: int) -> Optional[TaskWithDetails]:
    return storage.get_task(task_id)


def log_time(storage: StorageProvider, payload: TimeEntryCreate) -> TimeEntry:
    """Store a time entry and add its hours to the task.

    The entry is kept even when the task does not exist; the hour increment is
    then a no-op.
    """
    entry = storage.insert_time_entry(payload.model_dump())
    storage.add_task_hours(entry.task_id, entry.hours)
    return entry


def list_time_entries(storage: StorageProvider, task_id: Optional[int] = None) -> List[TimeEntry]:
    return storage.list_time_entries(task_id)
