"""Full-snapshot persistence of the event collection.

The whole collection is encoded as one JSON array and written under a single
key on every save. A blob that cannot be decoded is treated as no data.
"""

import json
import logging

from ..errors import PersistenceDecodeError
from ..events.models import Event
from ..logging import JSONLLogger
from .store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "events"


def encode_events(events: list[Event]) -> bytes:
    """Encode events, including records and display flags, as UTF-8 JSON."""
    return json.dumps([event.to_dict() for event in events], ensure_ascii=False).encode("utf-8")


def decode_events(blob: bytes) -> list[Event]:
    """Decode a snapshot produced by :func:`encode_events`.

    Raises:
        PersistenceDecodeError: If the blob is not a valid snapshot, including
            one with repeated event ids or repeated record ids in an event.
    """
    try:
        data = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise PersistenceDecodeError(f"Snapshot is not valid JSON: {e!r}") from e

    try:
        if not isinstance(data, list):
            raise TypeError("snapshot must be a JSON array")
        events = [Event.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
        raise PersistenceDecodeError(f"Snapshot has an invalid shape: {e!r}") from e

    _check_unique_ids(events)
    return events


def _check_unique_ids(events: list[Event]) -> None:
    seen_events: set[str] = set()
    for event in events:
        if event.id in seen_events:
            raise PersistenceDecodeError(f"Duplicate event id: {event.id}")
        seen_events.add(event.id)

        seen_records: set[str] = set()
        for record in event.records:
            if record.id in seen_records:
                raise PersistenceDecodeError(f"Duplicate record id in event {event.id}: {record.id}")
            seen_records.add(record.id)


class EventGateway:
    """Reads and writes the event snapshot in a key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.store = store
        self.key = key
        self.json_logger = json_logger

    def save(self, events: list[Event]) -> None:
        """Overwrite the stored snapshot with ``events``."""
        blob = encode_events(events)
        self.store.set(self.key, blob)
        if self.json_logger:
            self.json_logger.log_snapshot_saved(self.key, len(events), len(blob))

    def load(self) -> list[Event]:
        """Read the stored snapshot.

        Returns:
            The stored events, or an empty list when nothing is stored or the
            stored blob is malformed.
        """
        blob = self.store.get(self.key)
        if blob is None:
            return []

        try:
            events = decode_events(blob)
        except PersistenceDecodeError as e:
            logger.warning("Discarding unreadable snapshot under %r: %s", self.key, e)
            if self.json_logger:
                self.json_logger.log_decode_failure(self.key, str(e))
            return []

        if self.json_logger:
            self.json_logger.log_snapshot_loaded(self.key, len(events))
        return events
