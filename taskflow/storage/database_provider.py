"""
Relational storage provider backed by SQLAlchemy.
One instance per request, bound to that request's Session.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import models
from ..schemas.auth import UserRecord
from ..schemas.tasks import Activity, TaskWithDetails, TimeEntry
from ..schemas.team import Category, TeamMember
from .provider import DuplicateRecordError, StorageProvider


class DatabaseStorageProvider(StorageProvider):
    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateRecordError(str(exc.orig)) from exc

    # Users
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        row = self.db.get(models.User, user_id)
        return UserRecord.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        row = self.db.execute(
            select(models.User).where(models.User.username == username)
        ).scalar_one_or_none()
        return UserRecord.model_validate(row) if row else None

    def upsert_user(self, data: dict) -> UserRecord:
        now = datetime.utcnow()
        row = self.db.get(models.User, data["id"])
        if row is None:
            row = models.User(**data, created_at=now, updated_at=now)
            self.db.add(row)
        else:
            for key, value in data.items():
                setattr(row, key, value)
            row.updated_at = now
        self._commit()
        self.db.refresh(row)
        return UserRecord.model_validate(row)

    # Team members
    def list_team_members(self) -> List[TeamMember]:
        rows = self.db.execute(select(models.TeamMember).order_by(models.TeamMember.id)).scalars().all()
        return [TeamMember.model_validate(r) for r in rows]

    def get_team_member(self, member_id: int) -> Optional[TeamMember]:
        row = self.db.get(models.TeamMember, member_id)
        return TeamMember.model_validate(row) if row else None

    def create_team_member(self, data: dict) -> TeamMember:
        row = models.TeamMember(**data)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return TeamMember.model_validate(row)

    def update_team_member(self, member_id: int, data: dict) -> Optional[TeamMember]:
        row = self.db.get(models.TeamMember, member_id)
        if row is None:
            return None
        for key, value in data.items():
            setattr(row, key, value)
        self._commit()
        self.db.refresh(row)
        return TeamMember.model_validate(row)

    def delete_team_member(self, member_id: int) -> bool:
        result = self.db.execute(delete(models.TeamMember).where(models.TeamMember.id == member_id))
        self.db.commit()
        return result.rowcount > 0

    # Categories
    def list_categories(self) -> List[Category]:
        rows = self.db.execute(select(models.Category).order_by(models.Category.id)).scalars().all()
        return [Category.model_validate(r) for r in rows]

    def get_category(self, category_id: int) -> Optional[Category]:
        row = self.db.get(models.Category, category_id)
        return Category.model_validate(row) if row else None

    def create_category(self, data: dict) -> Category:
        row = models.Category(**data)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return Category.model_validate(row)

    def update_category(self, category_id: int, data: dict) -> Optional[Category]:
        row = self.db.get(models.Category, category_id)
        if row is None:
            return None
        for key, value in data.items():
            setattr(row, key, value)
        self._commit()
        self.db.refresh(row)
        return Category.model_validate(row)

    def delete_category(self, category_id: int) -> bool:
        result = self.db.execute(delete(models.Category).where(models.Category.id == category_id))
        self.db.commit()
        return result.rowcount > 0

    # Tasks
    def _enrich(self, row: models.Task) -> TaskWithDetails:
        # Best-effort resolve; a dangling id leaves the relation empty
        assignee = self.db.get(models.TeamMember, row.assignee_id) if row.assignee_id else None
        category = self.db.get(models.Category, row.category_id) if row.category_id else None
        task = TaskWithDetails.model_validate(row)
        task.assignee = TeamMember.model_validate(assignee) if assignee else None
        task.category = Category.model_validate(category) if category else None
        return task

    def list_tasks(
        self,
        status: Optional[str] = None,
        assignee_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[TaskWithDetails]:
        query = select(models.Task)
        if status:
            query = query.where(models.Task.status == status)
        elif assignee_id is not None:
            query = query.where(models.Task.assignee_id == assignee_id)
        elif category_id is not None:
            query = query.where(models.Task.category_id == category_id)
        rows = self.db.execute(query.order_by(models.Task.id)).scalars().all()
        return [self._enrich(r) for r in rows]

    def get_task(self, task_id: int) -> Optional[TaskWithDetails]:
        row = self.db.get(models.Task, task_id)
        return self._enrich(row) if row else None

    def insert_task(self, data: dict) -> TaskWithDetails:
        now = datetime.utcnow()
        row = models.Task(**{"created_at": now, "updated_at": now, **data})
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._enrich(row)

    def update_task(self, task_id: int, data: dict) -> Optional[TaskWithDetails]:
        row = self.db.get(models.Task, task_id)
        if row is None:
            return None
        for key, value in data.items():
            setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return self._enrich(row)

    def delete_task(self, task_id: int) -> bool:
        result = self.db.execute(delete(models.Task).where(models.Task.id == task_id))
        self.db.commit()
        return result.rowcount > 0

    def add_task_hours(self, task_id: int, hours: float) -> None:
        row = self.db.get(models.Task, task_id)
        if row is None:
            return
        row.actual_hours = (row.actual_hours or 0) + hours
        self.db.commit()

    # Time entries
    def list_time_entries(self, task_id: Optional[int] = None) -> List[TimeEntry]:
        query = select(models.TimeEntry)
        if task_id is not None:
            query = query.where(models.TimeEntry.task_id == task_id)
        rows = self.db.execute(query.order_by(models.TimeEntry.id)).scalars().all()
        return [TimeEntry.model_validate(r) for r in rows]

    def insert_time_entry(self, data: dict) -> TimeEntry:
        row = models.TimeEntry(**{"date": datetime.utcnow(), **data})
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return TimeEntry.model_validate(row)

    # Activities
    def list_activities(self, limit: int = 50) -> List[Activity]:
        rows = (
            self.db.execute(
                select(models.Activity)
                .order_by(models.Activity.created_at.desc(), models.Activity.id.desc())
                .limit(limit)
            )
            .scalars()
            .all()
        )
        return [Activity.model_validate(r) for r in rows]

    def insert_activity(self, data: dict) -> Activity:
        row = models.Activity(**{"created_at": datetime.utcnow(), **data})
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return Activity.model_validate(row)

    def clear_all(self) -> None:
        # Five independent deletes; users and sessions are kept
        for model in (models.TimeEntry, models.Activity, models.Task, models.Category, models.TeamMember):
            self.db.execute(delete(model))
            self.db.commit()
