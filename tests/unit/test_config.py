"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from billtrail.config import (
    DEFAULT_PATTERN,
    ScheduleConfig,
    SerializationFormat,
    load_settings,
)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_reads_toml(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text(
            f"""
[paths]
folders = ["{tmp_path / 'bills'}", ""]
database = "{tmp_path / 'db' / 'bills.db'}"

[processing]
file_pattern = "*.txt"
lenient_numbers = false

[schedule]
interval_days = 3
watch = false

[storage]
serialization = "yaml"
"""
        )

        settings = load_settings(config)

        assert settings.paths.folders == [tmp_path / "bills"]
        assert settings.paths.database == tmp_path / "db" / "bills.db"
        assert (tmp_path / "db").is_dir()
        assert settings.processing.file_pattern == "*.txt"
        assert settings.processing.lenient_numbers is False
        assert settings.schedule.interval_days == 3
        assert settings.schedule.run_on_startup is True
        assert settings.schedule.watch is False
        assert settings.storage.serialization is SerializationFormat.YAML

    def test_section_defaults(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text(f'[paths]\ndatabase = "{tmp_path / "bills.db"}"\n')

        settings = load_settings(config)

        assert settings.paths.folders == []
        assert settings.processing.file_pattern == DEFAULT_PATTERN
        assert settings.processing.lenient_numbers is True
        assert settings.schedule.interval_days == 7
        assert settings.storage.serialization is SerializationFormat.JSON

    def test_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        config = tmp_path / "config.toml"
        config.write_text('[paths]\nfolders = ["~/bills"]\ndatabase = "~/db/bills.db"\n')

        settings = load_settings(config)

        assert settings.paths.folders == [tmp_path / "bills"]
        assert settings.paths.database == tmp_path / "db" / "bills.db"


class TestScheduleConfig:
    """Tests for ScheduleConfig."""

    def test_interval_seconds(self) -> None:
        assert ScheduleConfig(interval_days=2).interval_seconds == 2 * 86400

    def test_rejects_zero_interval(self) -> None:
        with pytest.raises(ValidationError):
            ScheduleConfig(interval_days=0)
