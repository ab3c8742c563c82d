"""Calendar views: incidents bucketed by local calendar day."""

import calendar
from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..schemas.analytics import CalendarDay, CalendarMonth
from ..schemas.records import Incident, Patient
from ..utils.date_utils import DateLike, days_between, start_of_week, to_day, to_local_naive
from .search_service import filter_incidents


def day_key(value: DateLike) -> date:
    """
    Local-midnight calendar day used to match incidents to cells.

    Time of day is dropped, so 23:59 on the 1st still lands on the 1st.
    """
    return to_day(value)


def incidents_on(
    day: DateLike,
    incidents: Sequence[Incident],
    patients: Optional[Sequence[Patient]] = None,
    status: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Incident]:
    """
    Incidents whose appointment falls on ``day``.

    Args:
        day: Calendar day (any time component is ignored)
        incidents: Incident collection
        patients: Patient collection, needed to search by patient name
        status: Only keep this status ('all' or None keeps every status)
        query: Case-insensitive search over title, description, patient name

    Returns:
        Matching incidents, each once, earliest appointment first
    """
    target = day_key(day)
    candidates = filter_incidents(incidents, patients or [], search=query, status=status)

    seen = set()
    result = []
    for incident in candidates:
        if incident.id in seen or day_key(incident.appointment_date) != target:
            continue
        seen.add(incident.id)
        result.append(incident)

    return sorted(result, key=lambda i: to_local_naive(i.appointment_date))


def bucket_by_day(
    incidents: Sequence[Incident], start: DateLike, end: DateLike
) -> Dict[date, List[Incident]]:
    """Map every day in ``[start, end]`` to its incidents, in time order."""
    buckets: Dict[date, List[Incident]] = {
        day: [] for day in days_between(day_key(start), day_key(end))
    }
    for incident in sorted(incidents, key=lambda i: to_local_naive(i.appointment_date)):
        key = day_key(incident.appointment_date)
        if key in buckets:
            buckets[key].append(incident)
    return buckets


def month_grid(year: int, month: int, incidents: Sequence[Incident]) -> CalendarMonth:
    """
    Sunday-first weeks covering a month.

    Leading and trailing days from neighbouring months pad the first and
    last week and are flagged with ``in_month=False``.
    """
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    grid_start = start_of_week(first)
    grid_end = start_of_week(last) + timedelta(days=6)

    buckets = bucket_by_day(incidents, grid_start, grid_end)
    days = [
        CalendarDay(day=day, in_month=day.month == month, incidents=items)
        for day, items in buckets.items()
    ]

    in_month = [i for day in days if day.in_month for i in day.incidents]
    return CalendarMonth(
        year=year,
        month=month,
        weeks=[days[n:n + 7] for n in range(0, len(days), 7)],
        counts_by_status=dict(Counter(i.status.value for i in in_month)),
    )
