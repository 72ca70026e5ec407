"""Tracked events, their records, and the repository that owns them."""

from .models import Event, EventRecord
from .queries import (
    EventRow,
    RecordRow,
    build_event_rows,
    days_from_previous,
    days_since_latest,
    filtered_events,
    format_record_date,
    sorted_records,
)
from .repository import EventRepository

__all__ = [
    "Event",
    "EventRecord",
    "EventRepository",
    "EventRow",
    "RecordRow",
    "build_event_rows",
    "days_from_previous",
    "days_since_latest",
    "filtered_events",
    "format_record_date",
    "sorted_records",
]
