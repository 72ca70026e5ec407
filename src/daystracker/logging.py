"""JSONL logging of repository activity."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

DEFAULT_LOG_DIR = Path.home() / ".daystracker" / "logs"


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    event_id: str | None = None
    record_id: str | None = None
    storage_key: str | None = None
    count: int | None = None
    size_bytes: int | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {}}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "daystracker.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = DEFAULT_LOG_DIR
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict()) + "\n")

    def log(
        self,
        event: str,
        *,
        event_id: str | None = None,
        record_id: str | None = None,
        storage_key: str | None = None,
        count: int | None = None,
        size_bytes: int | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            event_id=event_id,
            record_id=record_id,
            storage_key=storage_key,
            count=count,
            size_bytes=size_bytes,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_mutation(
        self,
        action: str,
        *,
        event_id: str | None = None,
        record_id: str | None = None,
        **extra: Any,
    ) -> None:
        """Log a change to the event collection (``event_added`` etc.)."""
        self.log(action, event_id=event_id, record_id=record_id, **extra)

    def log_snapshot_saved(self, storage_key: str, count: int, size_bytes: int) -> None:
        """Log a full snapshot write."""
        self.log(
            "snapshot_saved",
            storage_key=storage_key,
            count=count,
            size_bytes=size_bytes,
        )

    def log_snapshot_loaded(self, storage_key: str, count: int) -> None:
        """Log a snapshot read."""
        self.log("snapshot_loaded", storage_key=storage_key, count=count)

    def log_decode_failure(self, storage_key: str, error: str) -> None:
        """Log a snapshot that could not be decoded and was discarded."""
        self.log("snapshot_decode_failed", storage_key=storage_key, error=error)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
