from fastapi import APIRouter, Depends

from ..schemas.analytics import DashboardStats
from ..services.analytics import dashboard_stats
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(storage: StorageProvider = Depends(get_storage)):
    return dashboard_stats(storage)
