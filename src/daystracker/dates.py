"""Calendar-day arithmetic.

All day counting works on local calendar dates rather than elapsed time, so
two timestamps on the same day are 0 days apart whatever their time of day,
and DST transitions never shift a count.
"""

from datetime import date, datetime, time


def to_local(value: datetime) -> datetime:
    """Return an aware datetime in the local time zone.

    Naive values are taken as local wall time.
    """
    return value.astimezone()


def local_date(value: date | datetime) -> date:
    """Calendar date of ``value`` in the local time zone."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return to_local(value).date()
    return value


def start_of_day(value: date | datetime) -> datetime:
    """Truncate ``value`` to the start of its local calendar day (naive)."""
    return datetime.combine(local_date(value), time())


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from ``start`` to ``end``.

    Negative when ``end`` is before ``start``; callers decide whether to clamp.
    """
    return (local_date(end) - local_date(start)).days


def is_same_calendar_day(
    value: date | datetime, reference_now: date | datetime | None = None
) -> bool:
    """True if ``value`` falls on the same local day as ``reference_now``.

    ``reference_now`` defaults to the current time, making this an "is today"
    check.
    """
    if reference_now is None:
        reference_now = datetime.now()
    return local_date(value) == local_date(reference_now)


def sort_key(value: datetime) -> datetime:
    """Comparable key for ordering a mix of naive and aware datetimes."""
    return to_local(value)
