from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..schemas.tasks import TimeEntry, TimeEntryCreate
from ..services import task_service
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/time-entries", tags=["time"])


@router.get("", response_model=List[TimeEntry])
def list_time_entries(
    task_id: Optional[int] = Query(default=None, alias="taskId"),
    storage: StorageProvider = Depends(get_storage),
):
    return task_service.list_time_entries(storage, task_id)


@router.post("", response_model=TimeEntry, status_code=status.HTTP_201_CREATED)
def create_time_entry(payload: TimeEntryCreate, storage: StorageProvider = Depends(get_storage)):
    return task_service.log_time(storage, payload)
