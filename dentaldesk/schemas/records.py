"""
Pydantic schemas for the persisted domain records.

Attributes are snake_case in Python; the stored JSON and the API payloads
use camelCase names (patientId, appointmentDate, ...) via the alias generator.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..utils.date_utils import to_local_naive


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================
# ENUMS
# ============================================================


class Role(str, Enum):
    """User roles."""

    ADMIN = "Admin"
    PATIENT = "Patient"


class IncidentStatus(str, Enum):
    """Appointment status. Any status may be set to any other."""

    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"


# Next statuses a form would offer first. Advisory; never enforced.
SUGGESTED_TRANSITIONS: Dict[IncidentStatus, List[IncidentStatus]] = {
    IncidentStatus.SCHEDULED: [
        IncidentStatus.IN_PROGRESS,
        IncidentStatus.CANCELLED,
        IncidentStatus.RESCHEDULED,
    ],
    IncidentStatus.IN_PROGRESS: [IncidentStatus.COMPLETED, IncidentStatus.CANCELLED],
    IncidentStatus.RESCHEDULED: [
        IncidentStatus.IN_PROGRESS,
        IncidentStatus.COMPLETED,
        IncidentStatus.CANCELLED,
    ],
    IncidentStatus.CANCELLED: [IncidentStatus.RESCHEDULED],
    IncidentStatus.COMPLETED: [],
}


# ============================================================
# USERS
# ============================================================


class UserCreate(CamelModel):
    """Fields supplied when creating a user."""

    role: Role
    email: str = Field(..., min_length=3)
    password: str
    name: str
    patient_id: Optional[str] = None
    avatar: Optional[str] = None

    @model_validator(mode="after")
    def patient_link_matches_role(self):
        """patient_id is present exactly when the role is Patient."""
        if self.role == Role.PATIENT and not self.patient_id:
            raise ValueError("Patient users must reference a patient record")
        if self.role == Role.ADMIN and self.patient_id:
            raise ValueError("Admin users cannot reference a patient record")
        return self


class User(UserCreate):
    """Stored user account. Passwords are kept in plaintext."""

    id: str
    created_at: Optional[datetime] = None


# ============================================================
# PATIENTS
# ============================================================


class PatientCreate(CamelModel):
    """Fields supplied when registering a patient."""

    name: str = Field(..., min_length=1)
    dob: date
    contact: str = ""
    email: str = ""
    address: str = ""
    emergency_contact: str = ""
    health_info: str = ""
    blood_group: Optional[str] = None
    user_id: Optional[str] = None


class Patient(PatientCreate):
    """Stored patient record."""

    id: str
    created_at: datetime


# ============================================================
# INCIDENTS
# ============================================================


class FileAttachment(CamelModel):
    """A file embedded in its incident as a data URI."""

    name: str
    type: str
    size: int = Field(..., ge=0)
    url: str
    uploaded_at: Optional[datetime] = None

    @field_validator("url")
    def url_is_data_uri(cls, v):
        if not v.startswith("data:"):
            raise ValueError("Attachment url must be a data URI")
        return v


# Older records used these names for the appointment fields.
LEGACY_FIELD_ALIASES = {
    "appointmentDate": ("appointment_date", "date", "scheduledDate"),
    "nextDate": ("next_date", "nextAppointmentDate"),
}


class IncidentCreate(CamelModel):
    """Fields supplied when booking an appointment."""

    patient_id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    comments: str = ""
    appointment_date: datetime
    cost: Optional[float] = Field(None, ge=0)
    treatment: str = ""
    status: IncidentStatus = IncidentStatus.SCHEDULED
    next_date: Optional[datetime] = None
    files: List[FileAttachment] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_fields(cls, data: Any) -> Any:
        """Rename legacy date fields to the canonical ones."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for canonical, aliases in LEGACY_FIELD_ALIASES.items():
            for alias in aliases:
                if alias in data:
                    value = data.pop(alias)
                    if data.get(canonical) is None:
                        data[canonical] = value
        return data

    @field_validator("files", mode="before")
    def null_files_as_empty(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def next_date_after_appointment(self):
        """A follow-up must come strictly after the appointment."""
        if self.next_date is not None:
            if to_local_naive(self.next_date) <= to_local_naive(self.appointment_date):
                raise ValueError("Next appointment must be after current appointment")
        return self


class Incident(IncidentCreate):
    """Stored appointment/treatment record."""

    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
