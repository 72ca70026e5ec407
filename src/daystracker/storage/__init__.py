"""Snapshot persistence and key-value stores."""

from .gateway import DEFAULT_STORAGE_KEY, EventGateway, decode_events, encode_events
from .store import InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "EventGateway",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SqliteKeyValueStore",
    "decode_events",
    "encode_events",
]
