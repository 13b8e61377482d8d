from typing import List, Optional

from ..schemas.auth import UserRecord
from ..schemas.tasks import Activity, TaskWithDetails, TimeEntry
from ..schemas.team import Category, TeamMember


class StorageProvider:
    """Data access for every TaskFlow entity.

    Write methods take plain dicts of snake_case column values that were
    validated at the HTTP boundary. Task reads always come back enriched with
    their assignee and category; a reference that no longer resolves is left
    as None.
    """

    # Users
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        raise NotImplementedError

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        raise NotImplementedError

    def upsert_user(self, data: dict) -> UserRecord:
        raise NotImplementedError

    # Team members
    def list_team_members(self) -> List[TeamMember]:
        raise NotImplementedError

    def get_team_member(self, member_id: int) -> Optional[TeamMember]:
        raise NotImplementedError

    def create_team_member(self, data: dict) -> TeamMember:
        raise NotImplementedError

    def update_team_member(self, member_id: int, data: dict) -> Optional[TeamMember]:
        raise NotImplementedError

    def delete_team_member(self, member_id: int) -> bool:
        raise NotImplementedError

    # Categories
    def list_categories(self) -> List[Category]:
        raise NotImplementedError

    def get_category(self, category_id: int) -> Optional[Category]:
        raise NotImplementedError

    def create_category(self, data: dict) -> Category:
        raise NotImplementedError

    def update_category(self, category_id: int, data: dict) -> Optional[Category]:
        raise NotImplementedError

    def delete_category(self, category_id: int) -> bool:
        raise NotImplementedError

    # Tasks
    def list_tasks(
        self,
        status: Optional[str] = None,
        assignee_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> List[TaskWithDetails]:
        raise NotImplementedError

    def get_task(self, task_id: int) -> Optional[TaskWithDetails]:
        raise NotImplementedError

    def insert_task(self, data: dict) -> TaskWithDetails:
        raise NotImplementedError

    def update_task(self, task_id: int, data: dict) -> Optional[TaskWithDetails]:
        raise NotImplementedError

    def delete_task(self, task_id: int) -> bool:
        raise NotImplementedError

    def add_task_hours(self, task_id: int, hours: float) -> None:
        raise NotImplementedError

    # Time entries
    def list_time_entries(self, task_id: Optional[int] = None) -> List[TimeEntry]:
        raise NotImplementedError

    def insert_time_entry(self, data: dict) -> TimeEntry:
        raise NotImplementedError

    # Activities
    def list_activities(self, limit: int = 50) -> List[Activity]:
        raise NotImplementedError

    def insert_activity(self, data: dict) -> Activity:
        raise NotImplementedError

    # Data management
    def clear_all(self) -> None:
        raise NotImplementedError


class DuplicateRecordError(Exception):
    """Raised when a write would violate a unique column (team member email, username)."""
