"""
Test calendar day matching and the month grid.
"""

from datetime import date, datetime

import pytest

from dentaldesk.services.calendar_service import (
    bucket_by_day,
    day_key,
    incidents_on,
    month_grid,
)


@pytest.mark.parametrize(
    "query_time",
    [
        datetime(2025, 7, 1, 0, 0),
        datetime(2025, 7, 1, 12, 0),
        datetime(2025, 7, 1, 23, 59, 59),
        date(2025, 7, 1),
        "2025-07-01",
    ],
)
def test_late_appointment_matches_its_day(make_incident, query_time):
    incident = make_incident(appointment_date=datetime(2025, 7, 1, 23, 59))

    assert incidents_on(query_time, [incident]) == [incident]


def test_day_key_drops_time():
    assert day_key("2025-07-01T23:59:00") == date(2025, 7, 1)
    assert day_key(datetime(2025, 7, 1, 0, 0)) == date(2025, 7, 1)


def test_incidents_on_sorts_and_dedupes(make_incident):
    late = make_incident(appointment_date=datetime(2025, 7, 8, 16, 0))
    early = make_incident(appointment_date=datetime(2025, 7, 8, 9, 0))
    other_day = make_incident(appointment_date=datetime(2025, 7, 9, 9, 0))

    result = incidents_on(date(2025, 7, 8), [late, early, late, other_day])

    assert result == [early, late]


def test_incidents_on_filters_by_status_and_query(store):
    day = date(2025, 7, 15)

    assert [i.id for i in incidents_on(day, store.incidents)] == ["i1"]
    assert incidents_on(day, store.incidents, status="Scheduled") == []
    assert [i.id for i in incidents_on(day, store.incidents, status="all")] == ["i1"]
    assert [
        i.id for i in incidents_on(day, store.incidents, store.patients, query="shyam")
    ] == ["i1"]
    assert incidents_on(day, store.incidents, store.patients, query="crown") == []


def test_bucket_by_day_covers_every_day(store):
    buckets = bucket_by_day(store.incidents, date(2025, 7, 1), date(2025, 7, 10))

    assert len(buckets) == 10
    assert [i.id for i in buckets[date(2025, 7, 5)]] == ["i4"]
    assert [i.id for i in buckets[date(2025, 7, 8)]] == ["i3"]
    assert buckets[date(2025, 7, 1)] == []


def test_month_grid_for_seed_month(store):
    grid = month_grid(2025, 7, store.incidents)

    assert len(grid.weeks) == 5
    assert all(len(week) == 7 for week in grid.weeks)
    first = grid.weeks[0][0]
    assert first.day == date(2025, 6, 29)
    assert first.in_month is False
    assert grid.weeks[-1][-1].day == date(2025, 8, 2)
    assert grid.counts_by_status == {"Completed": 2, "Scheduled": 2, "In Progress": 1}


def test_month_grid_counts_only_in_month_days(make_incident):
    padding = make_incident(appointment_date=datetime(2025, 6, 30, 9, 0))

    grid = month_grid(2025, 7, [padding])

    assert [i.id for i in grid.weeks[0][1].incidents] == [padding.id]
    assert grid.counts_by_status == {}
