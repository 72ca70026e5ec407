"""Assemble a ready-to-use repository from configuration."""

from .config import TrackerConfig, config_from_env
from .events import EventRepository
from .logging import configure_logger
from .storage import EventGateway, SqliteKeyValueStore


def open_repository(config: TrackerConfig | None = None) -> EventRepository:
    """Open the on-disk store and load the saved events.

    Args:
        config: Settings to use; read from file and environment if None.

    Returns:
        A loaded EventRepository backed by SQLite.
    """
    config = config or config_from_env()

    json_logger = configure_logger(
        log_dir=config.log_dir, max_size_mb=config.log_max_size_mb
    )

    store = SqliteKeyValueStore(config.db_path)
    store.init_db()

    gateway = EventGateway(store, key=config.storage_key, json_logger=json_logger)
    repository = EventRepository(gateway, json_logger=json_logger)
    repository.load()
    return repository
