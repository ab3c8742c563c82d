"""Date helpers shared by the store, metrics and calendar code."""

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

DateLike = Union[str, date, datetime]


def to_local_naive(value: datetime) -> datetime:
    """
    Convert a datetime to naive local time.

    Aware values are shifted into the host's local zone before the tzinfo
    is dropped; naive values are assumed to already be local.
    """
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_datetime(value: DateLike) -> datetime:
    """
    Parse an ISO string, date or datetime into a naive local datetime.

    Args:
        value: ISO-8601 string (a trailing 'Z' is accepted), date or datetime

    Returns:
        Naive datetime in local time

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def to_day(value: DateLike) -> date:
    """Calendar day (local) of a date, datetime or ISO string."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_datetime(value).date()


def is_same_day(first: DateLike, second: DateLike) -> bool:
    """True when both values fall on the same local calendar day."""
    return to_day(first) == to_day(second)


def get_age(birth_date: DateLike, today: Optional[date] = None) -> int:
    """
    Age in whole years, accounting for whether the birthday has passed.

    Args:
        birth_date: Date of birth
        today: Reference day, defaults to the current local day

    Returns:
        Age in years
    """
    today = today or date.today()
    birth = to_day(birth_date)
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def days_between(start: date, end: date) -> List[date]:
    """Every calendar day from ``start`` to ``end`` inclusive."""
    span = (end - start).days
    return [start + timedelta(days=offset) for offset in range(span + 1)]
