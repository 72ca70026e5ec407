"""In-memory event collection with write-through snapshot persistence."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any, Iterable

from ..errors import NotFoundError, ValidationError
from . import queries
from .models import Event, EventRecord

if TYPE_CHECKING:
    from ..logging import JSONLLogger
    from ..storage.gateway import EventGateway

logger = logging.getLogger(__name__)


def _as_datetime(value: date | datetime) -> datetime:
    """Plain dates are stored as local midnight."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise ValidationError(f"date must be a date or datetime, got {type(value).__name__}")


def _check_note(note: str) -> str:
    if not isinstance(note, str):
        raise ValidationError(f"note must be a string, got {type(note).__name__}")
    return note


class EventRepository:
    """Owns the events and their records.

    Every mutator changes the in-memory collection and then saves the full
    collection through the gateway before returning. Operations rejected for
    bad input or unknown ids leave both memory and storage untouched.

    Unknown ids always raise :class:`NotFoundError`; no operation is a silent
    no-op.
    """

    def __init__(
        self,
        gateway: EventGateway,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            gateway: Snapshot persistence used after every mutation.
            json_logger: Optional structured log of mutations.
        """
        self.gateway = gateway
        self.json_logger = json_logger
        self._events: list[Event] = []
        self._index: dict[str, Event] = {}

    @property
    def events(self) -> list[Event]:
        """Events in insertion order."""
        return list(self._events)

    def load(self) -> list[Event]:
        """Replace the in-memory collection with the stored snapshot."""
        self._set_events(self.gateway.load())
        logger.debug("Loaded %d events", len(self._events))
        return self.events

    def get_event(self, event_id: str) -> Event:
        """Look up an event by id.

        Raises:
            NotFoundError: If no event has ``event_id``.
        """
        event = self._index.get(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return event

    def get_record(self, event_id: str, record_id: str) -> EventRecord:
        """Look up a record within an event.

        Raises:
            NotFoundError: If either id is unknown.
        """
        record = self.get_event(event_id).find_record(record_id)
        if record is None:
            raise NotFoundError("record", record_id)
        return record

    # Mutators

    def add_event(self, title: str) -> Event:
        """Create an event with no records and append it to the list.

        Raises:
            ValidationError: If the title is empty after trimming.
        """
        trimmed = title.strip() if isinstance(title, str) else ""
        if not trimmed:
            raise ValidationError("Event title must not be empty")

        event = Event(title=trimmed)
        self._events.append(event)
        self._index[event.id] = event
        self._commit("event_added", event_id=event.id)
        return event

    def delete_event(self, event_id: str) -> None:
        """Remove an event together with all of its records."""
        event = self.get_event(event_id)
        self._events.remove(event)
        del self._index[event_id]
        self._commit("event_deleted", event_id=event_id, records=len(event.records))

    def delete_events(self, event_ids: Iterable[str]) -> None:
        """Remove several events with a single save.

        All ids are checked first; if any is unknown nothing is removed.
        """
        targets = {event_id: self.get_event(event_id) for event_id in event_ids}
        if not targets:
            return
        self._set_events([e for e in self._events if e.id not in targets])
        self._commit("events_deleted", count=len(targets))

    def add_record(
        self, event_id: str, date: date | datetime, note: str = ""
    ) -> EventRecord:
        """Append a record to an event. Past and future dates are allowed."""
        event = self.get_event(event_id)
        record = EventRecord(date=_as_datetime(date), note=_check_note(note))
        event.records.append(record)
        self._commit("record_added", event_id=event_id, record_id=record.id)
        return record

    def update_record(
        self, event_id: str, record_id: str, date: date | datetime, note: str
    ) -> EventRecord:
        """Replace a record's date and note in place; its id is kept."""
        record = self.get_record(event_id, record_id)
        new_date = _as_datetime(date)
        new_note = _check_note(note)
        record.date = new_date
        record.note = new_note
        self._commit("record_updated", event_id=event_id, record_id=record_id)
        return record

    def delete_record(self, event_id: str, record_id: str) -> None:
        """Remove exactly one record from an event."""
        event = self.get_event(event_id)
        record = self.get_record(event_id, record_id)
        event.records.remove(record)
        self._commit("record_deleted", event_id=event_id, record_id=record_id)

    def toggle_expanded(self, event_id: str) -> bool:
        """Flip the display flag of an event and return the new value."""
        event = self.get_event(event_id)
        event.is_expanded = not event.is_expanded
        self._commit("event_toggled", event_id=event_id, is_expanded=event.is_expanded)
        return event.is_expanded

    # Queries

    def sorted_records(self, event: Event) -> list[EventRecord]:
        """Records of ``event``, newest first."""
        return queries.sorted_records(event)

    def days_since_latest(self, event: Event, now: datetime | None = None) -> int | None:
        """Days since the newest record of ``event``, None if it has none."""
        return queries.days_since_latest(event, now)

    def days_from_previous(self, event: Event, record: EventRecord) -> int:
        """Days between ``record`` and the chronologically previous one."""
        return queries.days_from_previous(event, record)

    def filtered_events(self, search_text: str) -> list[Event]:
        """Events whose title matches ``search_text``."""
        return queries.filtered_events(self._events, search_text)

    # Internals

    def _set_events(self, events: list[Event]) -> None:
        self._events = list(events)
        self._index = {event.id: event for event in self._events}

    def _commit(self, action: str, **details: Any) -> None:
        """Persist the full collection after a mutation."""
        self.gateway.save(self._events)
        if self.json_logger:
            self.json_logger.log_mutation(action, **details)
