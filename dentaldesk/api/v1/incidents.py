"""Appointment (incident) endpoints, including file attachments."""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from dentaldesk.core.config import Settings
from dentaldesk.core.dependencies import get_data_store, get_settings_dependency
from dentaldesk.core.exceptions import DanglingReferenceError, EntityNotFoundError
from dentaldesk.schemas.records import Incident, IncidentCreate
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.search_service import filter_incidents, sort_incidents
from dentaldesk.utils.file_utils import (
    create_file_attachment,
    decode_data_uri,
    format_file_size,
    is_image_file,
    is_pdf_file,
)

router = APIRouter(prefix="/incidents", tags=["incidents"])


def _get_or_404(store: DataStore, incident_id: str) -> Incident:
    incident = store.get_incident_by_id(incident_id)
    if incident is None:
        raise HTTPException(status_code=404, detail=f"Incident not found: {incident_id}")
    return incident


@router.get("")
async def list_incidents(
    search: Optional[str] = Query(None, description="Title, description or patient name"),
    status: Optional[str] = Query(None, description="Status, or 'all'"),
    sort_by: str = Query("appointmentDate"),
    order: str = Query("desc", description="asc | desc"),
    user_id: Optional[str] = Query(None, description="Restrict to what this user may see"),
    store: DataStore = Depends(get_data_store),
):
    """List incidents with the appointment list's search, filter and sort."""
    incidents = store.incidents
    if user_id:
        user = store.get_user_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
        incidents = store.incidents_visible_to(user)

    incidents = filter_incidents(incidents, store.patients, search=search, status=status)
    try:
        incidents = sort_incidents(incidents, store.patients, sort_by=sort_by, order=order)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "count": len(incidents),
        "total": len(store.incidents),
        "incidents": incidents,
    }


@router.post("", status_code=201)
async def create_incident(data: IncidentCreate, store: DataStore = Depends(get_data_store)):
    try:
        incident = store.create_incident(data)
    except DanglingReferenceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"success": True, "incident": incident}


@router.get("/{incident_id}")
async def get_incident(incident_id: str, store: DataStore = Depends(get_data_store)):
    return {"success": True, "incident": _get_or_404(store, incident_id)}


@router.put("/{incident_id}")
async def update_incident(
    incident_id: str, data: IncidentCreate, store: DataStore = Depends(get_data_store)
):
    """
    Replace an incident's details.

    Attachments are kept unless the payload carries a ``files`` list.
    """
    existing = _get_or_404(store, incident_id)

    fields = data.model_dump()
    if "files" not in data.model_fields_set:
        fields["files"] = existing.files

    incident = Incident(**fields, id=incident_id, created_at=existing.created_at)
    try:
        incident = store.update_incident(incident)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DanglingReferenceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"success": True, "incident": incident}


@router.delete("/{incident_id}")
async def delete_incident(incident_id: str, store: DataStore = Depends(get_data_store)):
    try:
        store.delete_incident(incident_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


@router.post("/{incident_id}/files", status_code=201)
async def upload_file(
    incident_id: str,
    file: UploadFile = File(...),
    store: DataStore = Depends(get_data_store),
    settings: Settings = Depends(get_settings_dependency),
):
    """Attach an uploaded file to an incident as a data URI."""
    incident = _get_or_404(store, incident_id)
    content = await file.read()

    try:
        attachment = create_file_attachment(
            file.filename or "upload",
            content,
            file.content_type or "",
            max_size_mb=settings.max_file_size_mb,
            allowed_types=settings.allowed_file_types,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    updated = store.update_incident(
        incident.model_copy(update={"files": incident.files + [attachment]})
    )
    return {
        "success": True,
        "file": attachment,
        "size": format_file_size(attachment.size),
        "incident": updated,
    }


@router.get("/{incident_id}/files/{index}")
async def download_file(incident_id: str, index: int, store: DataStore = Depends(get_data_store)):
    """
    Return the decoded bytes of one attachment.

    Images and PDFs are served inline so they can be previewed.
    """
    incident = _get_or_404(store, incident_id)
    if not 0 <= index < len(incident.files):
        raise HTTPException(status_code=404, detail=f"No file at index {index}")

    attachment = incident.files[index]
    try:
        mime_type, content = decode_data_uri(attachment.url)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Stored file is corrupt: {e}")

    media_type = attachment.type or mime_type
    disposition = (
        "inline" if is_image_file(media_type) or is_pdf_file(media_type) else "attachment"
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'{disposition}; filename="{attachment.name}"'},
    )


@router.delete("/{incident_id}/files/{index}")
async def remove_file(incident_id: str, index: int, store: DataStore = Depends(get_data_store)):
    incident = _get_or_404(store, incident_id)
    if not 0 <= index < len(incident.files):
        raise HTTPException(status_code=404, detail=f"No file at index {index}")

    files = incident.files[:index] + incident.files[index + 1:]
    updated = store.update_incident(incident.model_copy(update={"files": files}))
    return {"success": True, "incident": updated}
