"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from backend.app.api.v1.endpoints import (
    auth, vehicles, drivers, trips,
    fuel_logs, maintenance_logs, analytics
)

router = APIRouter()

# Authentication endpoints (public signup/login, authenticated /me)
router.include_router(auth.router)

# Fleet resources (permission-gated)
router.include_router(vehicles.router)
router.include_router(drivers.router)
router.include_router(trips.router)
router.include_router(fuel_logs.router)
router.include_router(maintenance_logs.router)

# Read-only aggregates
router.include_router(analytics.router)
