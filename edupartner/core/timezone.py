"""
Timezone handling.

Everything stored or compared is a timezone-aware UTC datetime.
Naive values coming from clients or older rows are read as UTC.
"""
from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator

TZ_UTC = timezone.utc


def utc_now() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(TZ_UTC)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime to UTC.

    Args:
        dt: naive (assumed UTC) or aware datetime, or None

    Returns:
        aware datetime in UTC, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=TZ_UTC)
    return dt.astimezone(TZ_UTC)


# Request-side datetime: whatever offset the client sent, stored as UTC
UtcDatetime = Annotated[datetime, AfterValidator(to_utc)]
