"""Calendar endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from dentaldesk.core.dependencies import get_data_store
from dentaldesk.schemas.records import Incident
from dentaldesk.services.calendar_service import incidents_on, month_grid
from dentaldesk.services.data_store import DataStore

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _visible(store: DataStore, user_id: Optional[str]) -> List[Incident]:
    if not user_id:
        return store.incidents
    user = store.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
    return store.incidents_visible_to(user)


@router.get("/day/{day}")
async def get_day(
    day: date,
    status: Optional[str] = Query(None, description="Status, or 'all'"),
    q: Optional[str] = Query(None, description="Title, description or patient name"),
    user_id: Optional[str] = Query(None),
    store: DataStore = Depends(get_data_store),
):
    """Appointments on one calendar day, earliest first."""
    incidents = incidents_on(
        day, _visible(store, user_id), patients=store.patients, status=status, query=q
    )
    return {"success": True, "day": day, "count": len(incidents), "incidents": incidents}


@router.get("/month/{year}/{month}")
async def get_month(
    year: int = Path(..., ge=1900, le=9998),
    month: int = Path(..., ge=1, le=12),
    user_id: Optional[str] = Query(None),
    store: DataStore = Depends(get_data_store),
):
    """Sunday-first month grid with each day's appointments."""
    return {"success": True, "calendar": month_grid(year, month, _visible(store, user_id))}
