"""Tests for tracker configuration."""

import json
from pathlib import Path

import pytest

from daystracker.config import (
    DEFAULT_DATA_DIR,
    TrackerConfig,
    config_from_env,
    load_config,
    save_config,
)


class TestTrackerConfig:
    def test_default_values(self) -> None:
        config = TrackerConfig()

        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.storage_key == "events"
        assert config.log_dir == DEFAULT_DATA_DIR / "logs"
        assert config.log_max_size_mb == 10.0

    def test_paths_follow_data_dir(self, tmp_path: Path) -> None:
        config = TrackerConfig(data_dir=tmp_path)

        assert config.db_path == tmp_path / "daystracker.db"
        assert config.config_path == tmp_path / "config.json"
        assert config.log_dir == tmp_path / "logs"

    def test_empty_storage_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="storage_key"):
            TrackerConfig(storage_key="")

    def test_non_positive_log_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="log_max_size_mb"):
            TrackerConfig(log_max_size_mb=0)


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(data_dir=tmp_path)

        assert config.data_dir == tmp_path
        assert config.storage_key == "events"

    def test_reads_values(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(
            json.dumps(
                {
                    "storage": {"key": "events-v2"},
                    "logging": {"dir": str(tmp_path / "elsewhere"), "max_size_mb": 2},
                }
            )
        )

        config = load_config(data_dir=tmp_path)

        assert config.storage_key == "events-v2"
        assert config.log_dir == tmp_path / "elsewhere"
        assert config.log_max_size_mb == 2.0

    def test_invalid_json_uses_defaults(self, tmp_path: Path, caplog) -> None:
        (tmp_path / "config.json").write_text("{not json")

        config = load_config(data_dir=tmp_path)

        assert config.storage_key == "events"
        assert "Invalid JSON" in caplog.text

    def test_bad_values_fall_back(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(
            json.dumps({"storage": {"key": 7}, "logging": {"max_size_mb": -1}})
        )

        config = load_config(data_dir=tmp_path)

        assert config.storage_key == "events"
        assert config.log_max_size_mb == 10.0

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"storage": {"key": "other"}}))

        assert load_config(config_path=path).storage_key == "other"


class TestSaveConfig:
    def test_round_trip(self, tmp_path: Path) -> None:
        config = TrackerConfig(
            data_dir=tmp_path, storage_key="custom", log_max_size_mb=5.0
        )

        save_config(config)

        loaded = load_config(data_dir=tmp_path)
        assert loaded.storage_key == "custom"
        assert loaded.log_max_size_mb == 5.0
        assert loaded.log_dir == tmp_path / "logs"

    def test_defaults_write_empty_object(self, tmp_path: Path) -> None:
        save_config(TrackerConfig(data_dir=tmp_path))

        assert json.loads((tmp_path / "config.json").read_text()) == {}

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.json"

        save_config(TrackerConfig(data_dir=tmp_path), config_path=path)

        assert path.exists()


class TestConfigFromEnv:
    def test_env_overrides(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DAYSTRACKER_HOME", str(tmp_path / "home"))
        monkeypatch.setenv("DAYSTRACKER_STORAGE_KEY", "from-env")
        monkeypatch.setenv("DAYSTRACKER_LOG_DIR", str(tmp_path / "logs"))

        config = config_from_env()

        assert config.data_dir == tmp_path / "home"
        assert config.storage_key == "from-env"
        assert config.log_dir == tmp_path / "logs"

    def test_reads_dotenv_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        # setenv first so teardown also removes what load_dotenv writes
        for name in ("DAYSTRACKER_HOME", "DAYSTRACKER_STORAGE_KEY", "DAYSTRACKER_LOG_DIR"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        (tmp_path / ".env").write_text(f"DAYSTRACKER_HOME={tmp_path / 'dotenv-home'}\n")

        config = config_from_env()

        assert config.data_dir == tmp_path / "dotenv-home"
