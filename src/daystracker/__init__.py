"""DaysTracker: track how many days have passed since things happened."""

from .app import open_repository
from .config import TrackerConfig, config_from_env, load_config, save_config
from .errors import DaysTrackerError, NotFoundError, PersistenceDecodeError, ValidationError
from .events import Event, EventRecord, EventRepository
from .storage import EventGateway, InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore

__all__ = [
    "DaysTrackerError",
    "Event",
    "EventGateway",
    "EventRecord",
    "EventRepository",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "NotFoundError",
    "PersistenceDecodeError",
    "SqliteKeyValueStore",
    "TrackerConfig",
    "ValidationError",
    "config_from_env",
    "load_config",
    "open_repository",
    "save_config",
]
