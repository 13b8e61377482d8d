from typing import List

from fastapi import APIRouter, Depends

from ..auth.security import require_authenticated
from ..schemas.analytics import (
    CategoryAnalytics,
    ProductivityTrend,
    StatusAnalytics,
    TeamPerformance,
    TimeTracking,
    Workload,
)
from ..services import analytics
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/analytics", tags=["analytics"], dependencies=[Depends(require_authenticated)])


@router.get("/tasks", response_model=List[StatusAnalytics])
def task_analytics(storage: StorageProvider = Depends(get_storage)):
    return analytics.status_analytics(storage)


@router.get("/team-performance", response_model=List[TeamPerformance])
def team_performance(storage: StorageProvider = Depends(get_storage)):
    return analytics.team_performance(storage)


@router.get("/categories", response_model=List[CategoryAnalytics])
def category_analytics(storage: StorageProvider = Depends(get_storage)):
    return analytics.category_analytics(storage)


@router.get("/time-tracking", response_model=List[TimeTracking])
def time_tracking(storage: StorageProvider = Depends(get_storage)):
    return analytics.time_tracking(storage)


@router.get("/productivity-trends", response_model=List[ProductivityTrend])
def productivity_trends(storage: StorageProvider = Depends(get_storage)):
    return analytics.productivity_trends(storage)


@router.get("/workload-distribution", response_model=List[Workload])
def workload_distribution(storage: StorageProvider = Depends(get_storage)):
    return analytics.workload_distribution(storage)
