"""
Derived metrics over the patient and incident collections.

Every function here is pure: it takes the current collections and returns
a freshly computed result. Nothing is cached between calls.
"""

import math
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from ..schemas.analytics import (
    AgeBucket,
    AnalyticsReport,
    AnalyticsTotals,
    BloodGroupCount,
    DashboardStats,
    MonthlyBucket,
    PatientDashboard,
    StatusSlice,
    TopPatient,
    TreatmentRevenue,
)
from ..schemas.records import Incident, IncidentStatus, Patient
from ..utils.date_utils import month_bounds, to_day, to_local_naive

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

AGE_GROUPS = ["18-25", "26-35", "36-45", "45+"]

UPCOMING_LIMIT = 10
TOP_PATIENTS_LIMIT = 5


# ============================================================
# HELPERS
# ============================================================


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, as chart labels expect."""
    return int(math.floor(value + 0.5))


def percentage(count: int, total: int) -> int:
    """Whole-number share of ``total``; 0 when there is nothing to divide."""
    if not total:
        return 0
    return round_half_up(count / total * 100)


def _cost(incident: Incident) -> float:
    return incident.cost or 0


def _is_completed(incident: Incident) -> bool:
    return incident.status == IncidentStatus.COMPLETED


def revenue(incidents: Sequence[Incident]) -> float:
    """Sum of cost over completed incidents only."""
    return sum(_cost(i) for i in incidents if _is_completed(i))


def _appointment(incident: Incident) -> datetime:
    return to_local_naive(incident.appointment_date)


# ============================================================
# DASHBOARD
# ============================================================


def dashboard_stats(
    patients: Sequence[Patient],
    incidents: Sequence[Incident],
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Admin dashboard aggregates.

    Monthly figures cover the calendar month containing ``now``, first and
    last day included. Upcoming appointments exclude completed ones.

    Args:
        patients: Patient collection
        incidents: Incident collection
        now: Reference time, defaults to the current local time

    Returns:
        DashboardStats
    """
    now = to_local_naive(now) if now else datetime.now()
    month_start, month_end = month_bounds(now.date())

    this_month = [
        i for i in incidents if month_start <= to_day(i.appointment_date) <= month_end
    ]

    upcoming = sorted(
        (i for i in incidents if _appointment(i) > now and not _is_completed(i)),
        key=_appointment,
    )[:UPCOMING_LIMIT]

    spent: Dict[str, float] = defaultdict(float)
    counts: Counter = Counter()
    for incident in incidents:
        counts[incident.patient_id] += 1
        if _is_completed(incident):
            spent[incident.patient_id] += _cost(incident)

    # sorted() is stable, so ties keep collection order
    ranked = sorted(patients, key=lambda p: spent[p.id], reverse=True)
    top_patients = [
        TopPatient(patient=p, incident_count=counts[p.id], total_spent=spent[p.id])
        for p in ranked[:TOP_PATIENTS_LIMIT]
    ]

    statuses = Counter(i.status for i in incidents)

    return DashboardStats(
        total_patients=len(patients),
        total_incidents=len(incidents),
        completed_treatments=statuses[IncidentStatus.COMPLETED],
        pending_appointments=statuses[IncidentStatus.SCHEDULED],
        in_progress_treatments=statuses[IncidentStatus.IN_PROGRESS],
        total_revenue=revenue(incidents),
        monthly_revenue=revenue(this_month),
        this_month_incidents=len(this_month),
        upcoming_appointments=upcoming,
        top_patients=top_patients,
    )


def patient_dashboard(
    patient: Optional[Patient],
    incidents: Sequence[Incident],
    now: Optional[datetime] = None,
) -> PatientDashboard:
    """Dashboard for a single patient over that patient's incidents."""
    now = to_local_naive(now) if now else datetime.now()
    own = [i for i in incidents if patient and i.patient_id == patient.id]

    return PatientDashboard(
        patient=patient,
        appointments=own,
        upcoming_appointments=sorted(
            (i for i in own if _appointment(i) > now), key=_appointment
        ),
        completed_count=sum(1 for i in own if _is_completed(i)),
        total_spent=revenue(own),
    )


# ============================================================
# ANALYTICS
# ============================================================


def status_distribution(incidents: Sequence[Incident]) -> List[StatusSlice]:
    """Incident count and share per status, in first-seen order."""
    counts: Dict[str, int] = {}
    for incident in incidents:
        name = IncidentStatus(incident.status).value
        counts[name] = counts.get(name, 0) + 1

    total = len(incidents)
    return [
        StatusSlice(name=name, value=count, percentage=percentage(count, total))
        for name, count in counts.items()
    ]


def revenue_by_treatment(incidents: Sequence[Incident]) -> List[TreatmentRevenue]:
    """Billed cost and visit count per treatment title, across all statuses."""
    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    for incident in incidents:
        totals[incident.title] = totals.get(incident.title, 0) + _cost(incident)
        counts[incident.title] = counts.get(incident.title, 0) + 1

    return [
        TreatmentRevenue(treatment=title, revenue=amount, count=counts[title])
        for title, amount in totals.items()
    ]


def monthly_trend(
    patients: Sequence[Patient], incidents: Sequence[Incident], year: int
) -> List[MonthlyBucket]:
    """
    Twelve monthly buckets (Jan-Dec) for ``year``.

    Patients count in the month they were created, incidents in the month
    of their appointment; revenue only accrues from completed incidents.
    Records dated in any other year are left out.
    """
    buckets = [MonthlyBucket(month=label) for label in MONTH_LABELS]

    for patient in patients:
        created = to_local_naive(patient.created_at)
        if created.year == year:
            buckets[created.month - 1].patients += 1

    for incident in incidents:
        when = _appointment(incident)
        if when.year != year:
            continue
        bucket = buckets[when.month - 1]
        bucket.appointments += 1
        if _is_completed(incident):
            bucket.revenue += _cost(incident)

    return buckets


def age_group(dob: date, current_year: int) -> str:
    """
    Age bucket from the birth year alone.

    Uses ``current_year - birth year`` without adjusting for the birthday.
    """
    age = current_year - dob.year
    if age < 25:
        return "18-25"
    if age < 35:
        return "26-35"
    if age < 45:
        return "36-45"
    return "45+"


def age_distribution(patients: Sequence[Patient], current_year: int) -> List[AgeBucket]:
    counts = Counter(age_group(p.dob, current_year) for p in patients)
    total = len(patients)
    return [
        AgeBucket(age=group, count=counts[group], percentage=percentage(counts[group], total))
        for group in AGE_GROUPS
        if counts[group]
    ]


def blood_group_distribution(patients: Sequence[Patient]) -> List[BloodGroupCount]:
    counts: Dict[str, int] = {}
    for patient in patients:
        group = patient.blood_group or "Unknown"
        counts[group] = counts.get(group, 0) + 1
    return [BloodGroupCount(group=group, count=count) for group, count in counts.items()]


def analytics_report(
    patients: Sequence[Patient],
    incidents: Sequence[Incident],
    today: Optional[date] = None,
) -> AnalyticsReport:
    """
    Every analytics chart series in one pass over the collections.

    Args:
        patients: Patient collection
        incidents: Incident collection
        today: Reference day for the current year, defaults to today

    Returns:
        AnalyticsReport
    """
    today = today or date.today()
    total_revenue = revenue(incidents)
    completed = sum(1 for i in incidents if _is_completed(i))

    totals = AnalyticsTotals(
        total_patients=len(patients),
        total_incidents=len(incidents),
        total_revenue=total_revenue,
        completed_incidents=completed,
        success_rate=percentage(completed, len(incidents)),
        avg_revenue_per_patient=(
            round_half_up(total_revenue / len(patients)) if patients else 0
        ),
    )

    return AnalyticsReport(
        totals=totals,
        status_chart_data=status_distribution(incidents),
        revenue_chart_data=revenue_by_treatment(incidents),
        monthly_data=monthly_trend(patients, incidents, today.year),
        age_chart_data=age_distribution(patients, today.year),
        blood_group_data=blood_group_distribution(patients),
    )
