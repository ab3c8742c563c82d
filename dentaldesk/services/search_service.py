"""Search, filter and sort helpers for the patient and incident lists."""

from typing import Dict, List, Optional, Sequence

from ..schemas.records import Incident, Patient
from ..utils.date_utils import to_local_naive

SORT_FIELDS = ("appointmentDate", "patientName", "title", "status", "cost")


def search_patients(patients: Sequence[Patient], term: Optional[str]) -> List[Patient]:
    """Match name or email case-insensitively, or contact as a substring."""
    if not term:
        return list(patients)
    needle = term.lower()
    return [
        p
        for p in patients
        if needle in p.name.lower() or needle in p.email.lower() or term in p.contact
    ]


def _names_by_id(patients: Sequence[Patient]) -> Dict[str, str]:
    return {p.id: p.name for p in patients}


def filter_incidents(
    incidents: Sequence[Incident],
    patients: Sequence[Patient],
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Incident]:
    """
    Filter incidents by status and free-text search.

    The search matches title, description and patient name.
    """
    names = _names_by_id(patients)
    needle = (search or "").strip().lower()
    result = []

    for incident in incidents:
        if status and status != "all" and incident.status.value != status:
            continue
        if needle:
            haystack = (
                incident.title,
                incident.description,
                names.get(incident.patient_id, ""),
            )
            if not any(needle in field.lower() for field in haystack):
                continue
        result.append(incident)

    return result


def sort_incidents(
    incidents: Sequence[Incident],
    patients: Sequence[Patient],
    sort_by: str = "appointmentDate",
    order: str = "desc",
) -> List[Incident]:
    """
    Sort incidents for the appointment list.

    Args:
        incidents: Incidents to sort
        patients: Patient collection, used for 'patientName'
        sort_by: One of SORT_FIELDS
        order: 'asc' or 'desc'

    Raises:
        ValueError: If ``sort_by`` or ``order`` is not recognised
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by '{sort_by}'")
    if order not in ("asc", "desc"):
        raise ValueError(f"Sort order must be 'asc' or 'desc', got '{order}'")

    names = _names_by_id(patients)
    keys = {
        "appointmentDate": lambda i: to_local_naive(i.appointment_date),
        "patientName": lambda i: names.get(i.patient_id, "").lower(),
        "title": lambda i: i.title.lower(),
        "status": lambda i: i.status.value.lower(),
        "cost": lambda i: i.cost or 0,
    }
    return sorted(incidents, key=keys[sort_by], reverse=order == "desc")
