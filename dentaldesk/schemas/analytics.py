"""Response schemas for the dashboard, analytics and calendar views."""

from datetime import date
from typing import Dict, List, Optional

from pydantic import Field

from .records import CamelModel, Incident, Patient


class TopPatient(CamelModel):
    """A patient ranked by completed-treatment spend."""

    patient: Patient
    incident_count: int
    total_spent: float


class DashboardStats(CamelModel):
    """Admin dashboard aggregates."""

    total_patients: int
    total_incidents: int
    completed_treatments: int
    pending_appointments: int
    in_progress_treatments: int
    total_revenue: float
    monthly_revenue: float
    this_month_incidents: int
    upcoming_appointments: List[Incident] = Field(default_factory=list)
    top_patients: List[TopPatient] = Field(default_factory=list)


class PatientDashboard(CamelModel):
    """Dashboard shown to a Patient-role user."""

    patient: Optional[Patient] = None
    appointments: List[Incident] = Field(default_factory=list)
    upcoming_appointments: List[Incident] = Field(default_factory=list)
    completed_count: int = 0
    total_spent: float = 0


class AnalyticsTotals(CamelModel):
    total_patients: int
    total_incidents: int
    total_revenue: float
    completed_incidents: int
    success_rate: int
    avg_revenue_per_patient: int


class StatusSlice(CamelModel):
    name: str
    value: int
    percentage: int


class TreatmentRevenue(CamelModel):
    treatment: str
    revenue: float
    count: int


class MonthlyBucket(CamelModel):
    month: str
    patients: int = 0
    revenue: float = 0
    appointments: int = 0


class AgeBucket(CamelModel):
    age: str
    count: int
    percentage: int


class BloodGroupCount(CamelModel):
    group: str
    count: int


class AnalyticsReport(CamelModel):
    """Chart-ready series for the analytics page."""

    totals: AnalyticsTotals
    status_chart_data: List[StatusSlice]
    revenue_chart_data: List[TreatmentRevenue]
    monthly_data: List[MonthlyBucket]
    age_chart_data: List[AgeBucket]
    blood_group_data: List[BloodGroupCount]


class CalendarDay(CamelModel):
    """One calendar cell."""

    day: date
    in_month: bool = True
    incidents: List[Incident] = Field(default_factory=list)


class CalendarMonth(CamelModel):
    year: int
    month: int
    weeks: List[List[CalendarDay]]
    counts_by_status: Dict[str, int] = Field(default_factory=dict)
