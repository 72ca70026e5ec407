"""Data models for tracked events and their dated records."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def new_id() -> str:
    """Generate a fresh identifier for an event or record."""
    return str(uuid.uuid4())


@dataclass
class EventRecord:
    """A single dated occurrence of an event.

    Attributes:
        date: When it happened. Only the calendar day matters for counting.
        note: Optional free text, may be empty.
        id: Unique identifier, assigned at creation.
    """

    date: datetime
    note: str = ""
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventRecord":
        """Create from a persisted dictionary.

        Raises:
            KeyError: If ``id`` or ``date`` is missing.
            TypeError, ValueError: If a field has the wrong type or format.
        """
        return cls(
            id=_require_str(data["id"], "id"),
            date=_parse_date(data["date"]),
            note=_require_str(data.get("note", ""), "note"),
        )


@dataclass
class Event:
    """A named thing being tracked, owning zero or more records.

    ``is_expanded`` is a display flag only; it is persisted so the list
    reopens the way the user left it.
    """

    title: str
    records: list[EventRecord] = field(default_factory=list)
    is_expanded: bool = False
    id: str = field(default_factory=new_id)

    def find_record(self, record_id: str) -> EventRecord | None:
        """Return the record with ``record_id``, or None."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "title": self.title,
            "records": [record.to_dict() for record in self.records],
            "isExpanded": self.is_expanded,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """Create from a persisted dictionary.

        Unknown keys are ignored; ``records`` and ``isExpanded`` are optional.
        """
        records = data.get("records", [])
        if not isinstance(records, list):
            raise TypeError("records must be a list")
        is_expanded = data.get("isExpanded", False)
        if not isinstance(is_expanded, bool):
            raise TypeError("isExpanded must be a boolean")

        return cls(
            id=_require_str(data["id"], "id"),
            title=_require_str(data["title"], "title"),
            records=[EventRecord.from_dict(item) for item in records],
            is_expanded=is_expanded,
        )


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def _parse_date(value: Any) -> datetime:
    """Parse an ISO-8601 string or Unix epoch seconds."""
    # bool is an int subclass
    if isinstance(value, bool):
        raise TypeError("date must be a string or a number")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError("date must be a string or a number")
