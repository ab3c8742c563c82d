"""Patient record endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dentaldesk.core.dependencies import get_data_store
from dentaldesk.core.exceptions import EntityNotFoundError
from dentaldesk.schemas.records import Patient, PatientCreate
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.search_service import search_patients

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("")
async def list_patients(
    search: Optional[str] = Query(None, description="Name, email or contact"),
    store: DataStore = Depends(get_data_store),
):
    """List patients, optionally filtered by a search term."""
    patients = search_patients(store.patients, search)
    return {
        "success": True,
        "count": len(patients),
        "total": len(store.patients),
        "patients": patients,
    }


@router.post("", status_code=201)
async def create_patient(data: PatientCreate, store: DataStore = Depends(get_data_store)):
    patient = store.create_patient(data)
    return {"success": True, "patient": patient}


@router.get("/{patient_id}")
async def get_patient(patient_id: str, store: DataStore = Depends(get_data_store)):
    patient = store.get_patient_by_id(patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail=f"Patient not found: {patient_id}")
    return {"success": True, "patient": patient}


@router.put("/{patient_id}")
async def update_patient(
    patient_id: str, data: PatientCreate, store: DataStore = Depends(get_data_store)
):
    """
    Replace a patient's details; id and creation time are kept.

    The link to the owning user is kept unless the payload carries ``userId``.
    """
    existing = store.get_patient_by_id(patient_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Patient not found: {patient_id}")

    fields = data.model_dump()
    if "user_id" not in data.model_fields_set:
        fields["user_id"] = existing.user_id

    patient = Patient(**fields, id=patient_id, created_at=existing.created_at)
    try:
        patient = store.update_patient(patient)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "patient": patient}


@router.delete("/{patient_id}")
async def delete_patient(patient_id: str, store: DataStore = Depends(get_data_store)):
    """Delete a patient together with all of their incidents."""
    try:
        removed = store.delete_patient(patient_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "deleted_incidents": removed}


@router.get("/{patient_id}/incidents")
async def get_patient_incidents(patient_id: str, store: DataStore = Depends(get_data_store)):
    if store.get_patient_by_id(patient_id) is None:
        raise HTTPException(status_code=404, detail=f"Patient not found: {patient_id}")
    incidents = store.get_incidents_by_patient(patient_id)
    return {"success": True, "count": len(incidents), "incidents": incidents}
