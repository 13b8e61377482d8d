"""
Activity feed service.
Append-only log of task lifecycle events shown on the dashboard.
"""
from typing import List, Optional

from ..schemas.tasks import Activity
from ..storage.provider import StorageProvider


DEFAULT_ACTIVITY_LIMIT = 50


def record_activity(
    storage: StorageProvider,
    type: str,
    description: str,
    task_id: Optional[int] = None,
    member_id: Optional[int] = None,
) -> Activity:
    """
    Append an activity entry.

    Args:
        storage: Storage provider
        type: Event type (created|updated|completed|assigned)
        description: Human readable summary
        task_id: Task the event is about
        member_id: Team member involved, usually the assignee

    Returns:
        Created Activity
    """
    return storage.insert_activity(
        {
            "type": type,
            "task_id": task_id,
            "member_id": member_id,
            "description": description,
        }
    )


def get_recent_activities(storage: StorageProvider, limit: Optional[int] = None) -> List[Activity]:
    """Most recent first; a missing or zero `limit` means 50."""
    if not limit:
        limit = DEFAULT_ACTIVITY_LIMIT
    return storage.list_activities(max(0, limit))
