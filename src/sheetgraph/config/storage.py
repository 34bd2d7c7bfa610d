"""Where sheetgraph keeps its SQLite store, and how to override it."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

DATA_DIR_ENV: Final[str] = "SHEETGRAPH_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_FILENAME: Final[str] = "sheetgraph.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Location of the local data directory holding the entity store."""

    data_dir: Path
    database_filename: str = DATABASE_FILENAME

    def database_file(self, *, create_dir: bool = True) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if create_dir:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.database_filename

    def sqlite_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_file()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str

    def __post_init__(self) -> None:
        if not self.uri.strip():
            raise ConfigurationError("Database URI must not be blank")


def _platform_data_home() -> Path:
    # LOCALAPPDATA on Windows, XDG_DATA_HOME elsewhere
    if os.name == "nt":
        configured, fallback = "LOCALAPPDATA", Path.home() / "AppData" / "Local"
    else:
        configured, fallback = "XDG_DATA_HOME", Path.home() / ".local" / "share"
    value = os.getenv(configured)
    return Path(value) if value else fallback


def get_storage_config() -> StorageConfig:
    override = os.getenv(DATA_DIR_ENV)
    data_dir = Path(override) if override else _platform_data_home() / "sheetgraph"
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, otherwise a SQLite file in the data directory."""

    uri = os.getenv(DATABASE_URI_ENV)
    if uri is None:
        uri = (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri)
