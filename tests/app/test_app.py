from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from sheetgraph import app as app_module
from sheetgraph.adapters.memory import InMemoryDataLookup
from sheetgraph.adapters.sqlalchemy import SqlAlchemyDataLookup, shutdown
from sheetgraph.config import MissingConfigurationError
from tests.helpers.lookups import department_type, person_type
from tests.helpers.workbooks import make_xlsx

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_adapter_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    shutdown()
    yield
    shutdown()


@pytest.fixture
def types_file(tmp_path: Path) -> Path:
    path = tmp_path / "types.json"
    path.write_text(
        json.dumps(
            {
                "types": [
                    {"name": "Role", "propertiesList": [{"name": "name", "required": True}]},
                    {
                        "name": "Person",
                        "propertiesList": [
                            {"name": "name", "required": True},
                            {"name": "Role", "typeName": "Role"},
                        ],
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def workbook_file(tmp_path: Path) -> Path:
    path = tmp_path / "import.xlsx"
    path.write_bytes(
        make_xlsx(
            {
                "MAC": [["Type:name", "Role:name", "query"], ["Person", "admin", 1]],
                "Role": [["name", "alias"], ["admin", "admin-role"]],
                "Person": [["name", "Role:alias"], ["Ada", "admin-role"]],
            }
        )
    )
    return path


def test_dry_run_lookup_is_seeded_from_type_file(types_file: Path) -> None:
    lookup = app_module.build_lookup(dry_run=True, types_path=types_file)

    assert isinstance(lookup, InMemoryDataLookup)
    assert sorted(lookup.types) == ["Person", "Role"]


def test_missing_type_file_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError, match="not found"):
        app_module.read_type_file(tmp_path / "missing.json")


def test_build_lookup_starts_sql_store(types_file: Path) -> None:
    lookup = app_module.build_lookup(types_path=types_file)

    assert isinstance(lookup, SqlAlchemyDataLookup)


def test_import_workbook_file(workbook_file: Path, types_file: Path) -> None:
    lookup = app_module.build_lookup(dry_run=True, types_path=types_file)

    summary = app_module.import_workbook_file(workbook_file, lookup=lookup)

    assert summary.entities == {"Role": 1, "Person": 1}
    assert summary.mac_grants == 1
    assert isinstance(lookup, InMemoryDataLookup)
    (person,) = lookup.entities_of("Person")
    role = person.rel["Role"]
    assert not isinstance(role, dict)
    assert role.doc == {"name": "admin"}


def test_import_sheet_file(tmp_path: Path) -> None:
    path = tmp_path / "departments.xlsx"
    path.write_bytes(make_xlsx({"Departments": [["title", "alias"], ["Sales", "sales"]]}))
    lookup = InMemoryDataLookup.with_types([department_type(), person_type()])

    columns = app_module.import_sheet_file(path, "Department", lookup=lookup)

    assert columns == ["title", "alias"]
    assert [entity.alias for entity in lookup.entities_of("Department")] == ["sales"]
