"""
Workspace administration: wiping task data and seeding defaults.
"""
from datetime import datetime, timedelta
from typing import List, Optional

import structlog

from ..schemas.tasks import TaskCreate
from ..storage.provider import StorageProvider
from .activity import record_activity


logger = structlog.get_logger(__name__)


DEFAULT_TEAM_MEMBERS = [
    {"name": "Zacchaeus James", "email": "zacchaeus@company.com", "role": "Team Lead", "avatar_url": None},
    {"name": "Glory Arogundade", "email": "glory@company.com", "role": "UI Designer", "avatar_url": None},
    {"name": "Fiyinfoluwa Enis", "email": "fiyinfoluwa@company.com", "role": "Developer", "avatar_url": None},
    {"name": "Joseph", "email": "joseph@company.com", "role": "Developer", "avatar_url": None},
]

DEFAULT_CATEGORIES = [
    {"name": "Marketing", "parent_id": None, "color": "#3b82f6"},
    {"name": "Development", "parent_id": None, "color": "#10b981"},
    {"name": "Design", "parent_id": None, "color": "#8b5cf6"},
    {"name": "Analytics", "parent_id": None, "color": "#f59e0b"},
]

# (title, description, status, priority, due in days, estimated hours, member index, category name, position)
SAMPLE_TASKS = [
    ("Redesign landing page", "Update the main landing page with new branding and improved UX",
     "in_progress", "high", 7, 20, 1, "Design", 0),
    ("Implement user authentication", "Add login and registration functionality",
     "todo", "urgent", 3, 16, 2, "Development", 0),
    ("Social media campaign launch", "Coordinate the launch of the Q1 social media campaign across all platforms",
     "completed", "medium", -2, 12, 0, "Marketing", 0),
    ("Set up analytics dashboard", "Configure web analytics and a custom dashboard for tracking KPIs",
     "todo", "medium", 14, 8, 0, "Analytics", 1),
]


def seed_default_team_members(storage: StorageProvider) -> List[int]:
    """Insert the default members whose email is not taken yet. Returns the created ids."""
    existing = {m.email for m in storage.list_team_members()}
    created = []
    for member in DEFAULT_TEAM_MEMBERS:
        if member["email"] in existing:
            continue
        created.append(storage.create_team_member(dict(member)).id)
    return created


def clear_all_data(storage: StorageProvider, actor_id: Optional[str] = None) -> None:
    """Delete every task, category, member, time entry and activity, then reseed members.

    Not atomic: a failure part way leaves whatever was not deleted yet.
    """
    logger.warning("clear_all_data", actor_id=actor_id)
    storage.clear_all()
    seed_default_team_members(storage)


def seed_sample_data(storage: StorageProvider, now: Optional[datetime] = None) -> None:
    """Populate an empty workspace with demo members, categories and tasks."""
    now = now or datetime.utcnow()
    seed_default_team_members(storage)
    members = storage.list_team_members()
    existing_categories = {c.name: c for c in storage.list_categories()}
    for category in DEFAULT_CATEGORIES:
        if category["name"] not in existing_categories:
            existing_categories[category["name"]] = storage.create_category(dict(category))

    if storage.list_tasks():
        logger.info("seed_sample_data_skipped", reason="tasks already exist")
        return

    for title, description, status, priority, due_days, estimate, member_idx, category_name, position in SAMPLE_TASKS:
        assignee = members[member_idx] if member_idx < len(members) else None
        payload = TaskCreate(
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=now + timedelta(days=due_days),
            estimated_hours=estimate,
            assignee_id=assignee.id if assignee else None,
            category_id=existing_categories[category_name].id,
            position=position,
        )
        data = payload.model_dump()
        data["actual_hours"] = estimate if status == "completed" else int(estimate * 0.3)
        task = storage.insert_task(data)
        record_activity(
            storage,
            type="created",
            task_id=task.id,
            member_id=task.assignee_id,
            description=f'Task "{task.title}" was created',
        )
    logger.info("seed_sample_data_done", tasks=len(SAMPLE_TASKS))
