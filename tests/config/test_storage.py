from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sheetgraph.config import (
    ConfigurationError,
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_import_config,
    get_storage_config,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_storage_config_respects_data_dir_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SHEETGRAPH_DATA_DIR", str(tmp_path / "data"))

    config = get_storage_config()

    assert config.database_file() == (tmp_path / "data" / "sheetgraph.db").resolve()
    assert (tmp_path / "data").is_dir()


def test_database_uri_defaults_to_sqlite_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    storage = StorageConfig(data_dir=tmp_path)

    config = get_database_config(storage=storage)

    assert config.uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'sheetgraph.db'}"


def test_database_uri_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_blank_database_uri_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        DatabaseConfig(uri="  ")


def test_import_config_defaults() -> None:
    config = get_import_config()

    assert (config.control_sheet, config.role_sheet) == ("MAC", "Role")


def test_empty_database_uri_env_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "")

    with pytest.raises(ConfigurationError, match="must not be blank"):
        get_database_config()
