from datetime import UTC, datetime
from typing import Optional


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database"""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC"""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone(UTC).replace(tzinfo=None)
