"""Pure functions shaping events for display.

Nothing here mutates state or caches results; the collection is small and
everything is recomputed from the repository on each render.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from ..dates import days_between, local_date, sort_key
from ..errors import NotFoundError
from .models import Event, EventRecord

DATE_LABEL_FORMAT = "%Y/%m/%d"


@dataclass(frozen=True)
class RecordRow:
    """One record line in an expanded event."""

    record_id: str
    date_label: str
    note: str
    days_from_previous: int


@dataclass(frozen=True)
class EventRow:
    """One event section with its header values and record lines."""

    event_id: str
    title: str
    days_since_latest: int | None
    is_expanded: bool
    records: list[RecordRow] = field(default_factory=list)


def sorted_records(event: Event) -> list[EventRecord]:
    """Records newest first.

    Records on the same instant keep insertion order, so repeated calls give
    the same sequence.
    """
    return sorted(event.records, key=lambda r: sort_key(r.date), reverse=True)


def days_since_latest(event: Event, now: datetime | None = None) -> int | None:
    """Calendar days from the newest record to ``now``, or None if empty."""
    records = sorted_records(event)
    if not records:
        return None
    return days_between(records[0].date, now or datetime.now())


def days_from_previous(event: Event, record: EventRecord) -> int:
    """Calendar days between ``record`` and the one before it.

    Returns 0 for the oldest record.

    Raises:
        NotFoundError: If ``record`` does not belong to ``event``.
    """
    records = sorted_records(event)
    for index, candidate in enumerate(records):
        if candidate.id == record.id:
            break
    else:
        raise NotFoundError("record", record.id)

    if index + 1 < len(records):
        return days_between(records[index + 1].date, candidate.date)
    return 0


def filtered_events(events: Iterable[Event], search_text: str) -> list[Event]:
    """Events whose title contains ``search_text``, ignoring case.

    An empty search returns every event in its original order.
    """
    events = list(events)
    if not search_text:
        return events
    needle = search_text.casefold()
    return [event for event in events if needle in event.title.casefold()]


def format_record_date(value: date | datetime) -> str:
    """Date label shown on a record row, e.g. ``2024/01/10``."""
    return local_date(value).strftime(DATE_LABEL_FORMAT)


def build_event_rows(
    events: Iterable[Event],
    search_text: str = "",
    now: datetime | None = None,
) -> list[EventRow]:
    """Build the display rows for the event list.

    Args:
        events: Events in repository order.
        search_text: Optional title filter.
        now: Reference time for "days since"; defaults to the current time.

    Returns:
        One row per matching event. Record rows are filled in for every
        event regardless of ``is_expanded``; the view decides what to show.
    """
    now = now or datetime.now()
    rows = []
    for event in filtered_events(events, search_text):
        records = sorted_records(event)
        record_rows = []
        for index, record in enumerate(records):
            previous = records[index + 1] if index + 1 < len(records) else None
            record_rows.append(
                RecordRow(
                    record_id=record.id,
                    date_label=format_record_date(record.date),
                    note=record.note,
                    days_from_previous=(
                        days_between(previous.date, record.date) if previous else 0
                    ),
                )
            )
        rows.append(
            EventRow(
                event_id=event.id,
                title=event.title,
                days_since_latest=(
                    days_between(records[0].date, now) if records else None
                ),
                is_expanded=event.is_expanded,
                records=record_rows,
            )
        )
    return rows
