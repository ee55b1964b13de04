"""
Parsing of caller-supplied list filters.

Raises ValueError with a caller-facing message; use cases turn it into a
VALIDATION_ERROR before any query runs.
"""

from datetime import date, datetime, time
from typing import Optional, Tuple

from audit_trail.domain.base import to_naive_utc

END_OF_DAY = time(23, 59, 59, 999999)


def parse_bound(raw: Optional[str], name: str, end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse one date bound.

    A date-only value covers the whole UTC day: the lower bound starts at
    00:00:00, the upper bound ends at 23:59:59.999999.
    """
    if raw is None or not raw.strip():
        return None
    raw = raw.strip()

    try:
        day = date.fromisoformat(raw)
    except ValueError:
        pass
    else:
        return datetime.combine(day, END_OF_DAY if end_of_day else time.min)

    try:
        return to_naive_utc(datetime.fromisoformat(raw))
    except ValueError:
        raise ValueError(f"{name} must be an ISO date or datetime, got '{raw}'")


def resolve_date_range(
    date_from: Optional[str], date_to: Optional[str]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    start = parse_bound(date_from, "date_from")
    end = parse_bound(date_to, "date_to", end_of_day=True)
    if start is not None and end is not None and start > end:
        raise ValueError("date_from must not be later than date_to")
    return start, end


def validate_paging(page: int, limit: int) -> None:
    if page < 1:
        raise ValueError("page must be 1 or greater")
    if limit < 1:
        raise ValueError("limit must be 1 or greater")
