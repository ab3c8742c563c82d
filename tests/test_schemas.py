"""
Test record schemas: aliases, legacy fields and field constraints.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dentaldesk.schemas.records import (
    FileAttachment,
    Incident,
    IncidentCreate,
    IncidentStatus,
    SUGGESTED_TRANSITIONS,
    User,
)


def base_incident(**overrides):
    data = {
        "id": "i1",
        "patientId": "p1",
        "title": "Routine Cleaning",
        "appointmentDate": "2025-07-15T10:00:00",
        "status": "Completed",
        "createdAt": "2025-06-20T10:00:00Z",
    }
    data.update(overrides)
    return data


def test_incident_files_default_to_empty():
    incident = Incident.model_validate(base_incident())
    assert incident.files == []
    assert Incident.model_validate(base_incident(files=None)).files == []


def test_incident_storage_uses_camel_case():
    stored = Incident.model_validate(base_incident(cost=120)).to_storage()
    assert stored["patientId"] == "p1"
    assert stored["appointmentDate"] == "2025-07-15T10:00:00"
    assert stored["status"] == "Completed"
    assert "patient_id" not in stored


def test_legacy_date_fields_are_migrated():
    data = base_incident(nextAppointmentDate="2025-10-15T10:00:00")
    data["date"] = data.pop("appointmentDate")

    incident = Incident.model_validate(data)

    assert incident.appointment_date == datetime(2025, 7, 15, 10, 0)
    assert incident.next_date == datetime(2025, 10, 15, 10, 0)
    assert "date" not in incident.to_storage()


def test_scheduled_date_alias_is_migrated():
    data = base_incident()
    data["scheduledDate"] = data.pop("appointmentDate")
    assert Incident.model_validate(data).appointment_date == datetime(2025, 7, 15, 10, 0)


def test_missing_appointment_date_is_rejected():
    data = base_incident()
    del data["appointmentDate"]
    with pytest.raises(ValidationError):
        Incident.model_validate(data)


@pytest.mark.parametrize("next_date", ["2025-07-15T10:00:00", "2025-07-01T10:00:00"])
def test_next_date_must_follow_appointment(next_date):
    with pytest.raises(ValidationError, match="Next appointment must be after"):
        Incident.model_validate(base_incident(nextDate=next_date))


def test_next_date_compares_aware_and_naive():
    incident = IncidentCreate(
        patient_id="p1",
        title="Crown",
        appointment_date=datetime(2025, 7, 8, 11, 0),
        next_date=datetime(2025, 7, 20, 11, 0, tzinfo=timezone.utc),
    )
    assert incident.next_date is not None


def test_negative_cost_is_rejected():
    with pytest.raises(ValidationError):
        Incident.model_validate(base_incident(cost=-1))
    assert Incident.model_validate(base_incident(cost=None)).cost is None


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        Incident.model_validate(base_incident(status="Lost"))


def test_any_status_may_follow_any_other():
    incident = Incident.model_validate(base_incident(status="Completed"))
    reopened = Incident.model_validate({**incident.to_storage(), "status": "Scheduled"})
    assert reopened.status == IncidentStatus.SCHEDULED
    assert IncidentStatus.COMPLETED not in SUGGESTED_TRANSITIONS[IncidentStatus.SCHEDULED]


def test_attachment_requires_data_uri():
    with pytest.raises(ValidationError):
        FileAttachment(name="a.png", type="image/png", size=1, url="https://x/a.png")


def test_patient_user_requires_patient_link():
    with pytest.raises(ValidationError):
        User(id="9", role="Patient", email="x@y.in", password="secret1", name="X")
    with pytest.raises(ValidationError):
        User(id="9", role="Admin", email="x@y.in", password="secret1", name="X", patient_id="p1")
    assert User(id="9", role="Patient", email="x@y.in", password="secret1", name="X", patient_id="p1")
