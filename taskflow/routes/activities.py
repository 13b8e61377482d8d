from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas.tasks import Activity
from ..services.activity import get_recent_activities
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=List[Activity])
def list_activities(
    limit: Optional[int] = Query(default=None, ge=0),
    storage: StorageProvider = Depends(get_storage),
):
    return get_recent_activities(storage, limit)
