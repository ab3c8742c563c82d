"""
Utils package initialization.

file_utils is imported directly by callers; it depends on the record
schemas, which in turn use the date helpers exported here.
"""

from dentaldesk.utils.date_utils import (
    parse_datetime,
    to_day,
    to_local_naive,
    get_age,
    month_bounds,
)
from dentaldesk.utils.identifiers import generate_id

__all__ = [
    "parse_datetime",
    "to_day",
    "to_local_naive",
    "get_age",
    "month_bounds",
    "generate_id",
]
