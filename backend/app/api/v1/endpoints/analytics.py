"""
Analytics API Endpoints.

Read-only aggregates for the dashboard and the analytics page.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from backend.app.db.session import get_db
from backend.app.schemas.analytics import DashboardKpis, VehicleOperationalStats
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.dependencies import CurrentOfficer
from backend.app.core.guards import require_permission
from backend.app.core.permissions import Permission
from backend.app.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/dashboard", response_model=ApiResponse[DashboardKpis])
async def get_dashboard_kpis(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_DASHBOARD)),
    db: AsyncSession = Depends(get_db)
):
    """Fleet-wide KPIs shown on every role's dashboard."""
    return ok("Dashboard KPIs", await AnalyticsService.get_dashboard_kpis(db))


@router.get("/operational", response_model=ApiResponse[List[VehicleOperationalStats]])
async def get_operational_analytics(
    current: CurrentOfficer = Depends(require_permission(Permission.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db)
):
    """Per-vehicle costs, revenue and ROI."""
    return ok("Operational analytics", await AnalyticsService.get_vehicle_operational_stats(db))
