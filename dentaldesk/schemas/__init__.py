"""
Schemas package initialization.
"""

from dentaldesk.schemas.records import (
    Role,
    IncidentStatus,
    SUGGESTED_TRANSITIONS,
    User,
    UserCreate,
    Patient,
    PatientCreate,
    Incident,
    IncidentCreate,
    FileAttachment,
)
from dentaldesk.schemas.analytics import (
    DashboardStats,
    PatientDashboard,
    AnalyticsReport,
    CalendarDay,
    CalendarMonth,
)
from dentaldesk.schemas.auth import LoginRequest, RegistrationRequest, AuthSession
from dentaldesk.schemas.common import HealthCheck

__all__ = [
    "Role",
    "IncidentStatus",
    "SUGGESTED_TRANSITIONS",
    "User",
    "UserCreate",
    "Patient",
    "PatientCreate",
    "Incident",
    "IncidentCreate",
    "FileAttachment",
    "DashboardStats",
    "PatientDashboard",
    "AnalyticsReport",
    "CalendarDay",
    "CalendarMonth",
    "LoginRequest",
    "RegistrationRequest",
    "AuthSession",
    "HealthCheck",
]
