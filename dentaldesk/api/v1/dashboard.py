"""Dashboard and analytics endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from dentaldesk.core.dependencies import get_data_store
from dentaldesk.schemas.records import Role
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.metrics_service import analytics_report, patient_dashboard

router = APIRouter(tags=["analytics"])


@router.get("/dashboard/{user_id}")
async def get_dashboard(user_id: str, store: DataStore = Depends(get_data_store)):
    """
    Role-based dashboard.

    Admins get clinic-wide aggregates; patients get their own appointments
    and spend.
    """
    user = store.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")

    if user.role == Role.ADMIN:
        return {"success": True, "role": user.role, "stats": store.get_stats()}

    patient = store.get_patient_by_user_id(user.id)
    return {
        "success": True,
        "role": user.role,
        "dashboard": patient_dashboard(patient, store.incidents),
    }


@router.get("/analytics")
async def get_analytics(store: DataStore = Depends(get_data_store)):
    """All chart series for the analytics page."""
    return {"success": True, "analytics": analytics_report(store.patients, store.incidents)}
