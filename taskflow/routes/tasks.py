from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..auth.security import require_authenticated, require_role
from ..schemas.tasks import TaskCreate, TaskUpdate, TaskWithDetails
from ..services import task_service
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskWithDetails])
def list_tasks(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    assignee_id: Optional[int] = Query(default=None, alias="assigneeId"),
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_authenticated),
):
    return task_service.list_tasks(
        storage,
        status=status_filter,
        assignee_id=assignee_id,
        category_id=category_id,
    )


@router.get("/{task_id}", response_model=TaskWithDetails)
def get_task(task_id: int, storage: StorageProvider = Depends(get_storage)):
    task = task_service.get_task(storage, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=TaskWithDetails, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    return task_service.create_task(storage, payload)


@router.put("/{task_id}", response_model=TaskWithDetails)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    task = task_service.update_task(storage, task_id, payload)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    if not task_service.delete_task(storage, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
