"""Configuration management using pydantic-settings."""

import tomllib
from enum import Enum
from pathlib import Path
from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE = "~/.local/share/billtrail/bills.db"
DEFAULT_PATTERN = "*.pdf"
DEFAULT_INTERVAL_DAYS = 7
CONFIG_PATH = Path("~/.config/billtrail/config.toml").expanduser()


class SerializationFormat(str, Enum):
    """Encodings for the stored record copy."""

    JSON = "json"
    YAML = "yaml"


class PathsConfig(BaseSettings):
    folders: list[Path] = []
    database: Path = Path(DEFAULT_DATABASE)

    @field_validator("database", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @field_validator("folders", mode="before")
    @classmethod
    def expand_folders(cls, v: list[str | Path]) -> list[Path]:
        return [Path(p).expanduser() for p in v if str(p).strip()]


class ProcessingConfig(BaseSettings):
    file_pattern: str = DEFAULT_PATTERN
    # Missing consumption/financial fields read as zero when true
    lenient_numbers: bool = True


class ScheduleConfig(BaseSettings):
    enabled: bool = True
    interval_days: int = DEFAULT_INTERVAL_DAYS
    run_on_startup: bool = True
    watch: bool = True

    @field_validator("interval_days")
    @classmethod
    def positive_interval(cls, v: int) -> int:
        if v < 1:
            raise ValueError("interval_days must be at least 1")
        return v

    @property
    def interval_seconds(self) -> float:
        return self.interval_days * 24 * 60 * 60


class StorageConfig(BaseSettings):
    serialization: SerializationFormat = SerializationFormat.JSON


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BILLTRAIL_")

    paths: PathsConfig = PathsConfig()
    processing: ProcessingConfig = ProcessingConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    storage: StorageConfig = StorageConfig()

    @model_validator(mode="after")
    def ensure_dirs(self) -> Self:
        self.paths.database.parent.mkdir(parents=True, exist_ok=True)
        return self


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        paths = PathsConfig(**data.get("paths", {}))
        processing = ProcessingConfig(**data.get("processing", {}))
        schedule = ScheduleConfig(**data.get("schedule", {}))
        storage = StorageConfig(**data.get("storage", {}))
        return Settings(
            paths=paths, processing=processing, schedule=schedule, storage=storage
        )

    return Settings()
