"""Exceptions raised by the event tracking core."""


class DaysTrackerError(Exception):
    """Base class for all daystracker errors."""

    pass


class ValidationError(DaysTrackerError, ValueError):
    """Raised when a mutator receives invalid input (e.g. a blank title)."""

    pass


class NotFoundError(DaysTrackerError, LookupError):
    """Raised when an event or record id does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class PersistenceDecodeError(DaysTrackerError):
    """Raised when a stored snapshot cannot be decoded."""

    pass
