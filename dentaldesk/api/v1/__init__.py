"""
API v1 routes aggregation.
"""

from fastapi import APIRouter
from dentaldesk.api.v1.auth import router as auth_router
from dentaldesk.api.v1.patients import router as patients_router
from dentaldesk.api.v1.incidents import router as incidents_router
from dentaldesk.api.v1.dashboard import router as dashboard_router
from dentaldesk.api.v1.calendar import router as calendar_router

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(auth_router)
router.include_router(patients_router)
router.include_router(incidents_router)
router.include_router(dashboard_router)
router.include_router(calendar_router)
