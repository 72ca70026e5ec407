"""Tracker configuration loader.

Settings come from ``~/.daystracker/config.json`` and can be overridden with
environment variables (a ``.env`` file is honoured).
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".daystracker"
DEFAULT_STORAGE_KEY = "events"
DEFAULT_LOG_MAX_SIZE_MB = 10.0
CONFIG_FILENAME = "config.json"
DB_FILENAME = "daystracker.db"


@dataclass
class TrackerConfig:
    """Configuration for the event tracker.

    Attributes:
        data_dir: Directory holding the database, config and logs.
        storage_key: Key the event snapshot is stored under.
        log_dir: Directory for JSONL logs (``data_dir/logs`` if None).
        log_max_size_mb: Size at which the JSONL log is rotated.
    """

    data_dir: Path | None = None
    storage_key: str = DEFAULT_STORAGE_KEY
    log_dir: Path | None = None
    log_max_size_mb: float = DEFAULT_LOG_MAX_SIZE_MB

    def __post_init__(self) -> None:
        """Validate config and set defaults."""
        if self.data_dir is None:
            self.data_dir = DEFAULT_DATA_DIR

        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"

        if not self.storage_key:
            raise ValueError("storage_key must not be empty")

        if self.log_max_size_mb <= 0:
            raise ValueError("log_max_size_mb must be positive")

    @property
    def db_path(self) -> Path:
        """SQLite database holding the key-value store."""
        assert self.data_dir is not None
        return self.data_dir / DB_FILENAME

    @property
    def config_path(self) -> Path:
        assert self.data_dir is not None
        return self.data_dir / CONFIG_FILENAME


def load_config(config_path: Path | None = None, data_dir: Path | None = None) -> TrackerConfig:
    """Load TrackerConfig from a JSON file.

    The config file should have this structure:
    ```json
    {
      "storage": {"key": "events"},
      "logging": {"dir": "~/.daystracker/logs", "max_size_mb": 10}
    }
    ```

    Args:
        config_path: Path to config file. Defaults to ``data_dir/config.json``.
        data_dir: Data directory for the returned config.

    Returns:
        TrackerConfig instance with loaded values, or defaults if the file is
        missing or unreadable.
    """
    path = config_path or TrackerConfig(data_dir=data_dir).config_path

    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return TrackerConfig(data_dir=data_dir)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s: %s. Using defaults.", path, e)
        return TrackerConfig(data_dir=data_dir)
    except OSError as e:
        logger.warning("Cannot read %s: %s. Using defaults.", path, e)
        return TrackerConfig(data_dir=data_dir)

    if not isinstance(data, dict):
        logger.warning("Config in %s is not an object. Using defaults.", path)
        return TrackerConfig(data_dir=data_dir)

    return _parse_config(data, data_dir)


def _parse_config(data: dict[str, Any], data_dir: Path | None) -> TrackerConfig:
    """Parse config dictionary into TrackerConfig, ignoring bad values."""
    storage = data.get("storage", {})
    if not isinstance(storage, dict):
        storage = {}
    log_settings = data.get("logging", {})
    if not isinstance(log_settings, dict):
        log_settings = {}

    key = storage.get("key", DEFAULT_STORAGE_KEY)
    if not isinstance(key, str) or not key:
        key = DEFAULT_STORAGE_KEY

    log_dir: Path | None = None
    raw_dir = log_settings.get("dir")
    if isinstance(raw_dir, str) and raw_dir:
        log_dir = Path(raw_dir).expanduser()

    max_size = log_settings.get("max_size_mb", DEFAULT_LOG_MAX_SIZE_MB)
    if isinstance(max_size, bool) or not isinstance(max_size, (int, float)) or max_size <= 0:
        max_size = DEFAULT_LOG_MAX_SIZE_MB

    return TrackerConfig(
        data_dir=data_dir,
        storage_key=key,
        log_dir=log_dir,
        log_max_size_mb=float(max_size),
    )


def save_config(config: TrackerConfig, config_path: Path | None = None) -> None:
    """Save TrackerConfig to a JSON file.

    Only values that differ from the defaults are written.
    """
    path = config_path or config.config_path
    path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {}

    if config.storage_key != DEFAULT_STORAGE_KEY:
        data["storage"] = {"key": config.storage_key}

    log_settings: dict[str, Any] = {}
    assert config.data_dir is not None
    if config.log_dir != config.data_dir / "logs":
        log_settings["dir"] = str(config.log_dir)
    if config.log_max_size_mb != DEFAULT_LOG_MAX_SIZE_MB:
        log_settings["max_size_mb"] = config.log_max_size_mb
    if log_settings:
        data["logging"] = log_settings

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise


def config_from_env() -> TrackerConfig:
    """Load configuration, letting environment variables override the file.

    Reads ``DAYSTRACKER_HOME``, ``DAYSTRACKER_STORAGE_KEY`` and
    ``DAYSTRACKER_LOG_DIR``.
    """
    load_dotenv(find_dotenv(usecwd=True))

    home = os.getenv("DAYSTRACKER_HOME")
    data_dir = Path(home).expanduser() if home else None
    config = load_config(data_dir=data_dir)

    key = os.getenv("DAYSTRACKER_STORAGE_KEY")
    if key:
        config.storage_key = key

    log_dir = os.getenv("DAYSTRACKER_LOG_DIR")
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()

    return config
