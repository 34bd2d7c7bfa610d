from __future__ import annotations

import asyncio

import pytest

import sheetgraph.domain.mapping.workbook as workbook_module
from sheetgraph.adapters.xlsx import read_workbook
from sheetgraph.config import ImportConfig
from sheetgraph.domain.errors import ArgumentError, SheetOrderError, TypeNotFoundError
from sheetgraph.domain.mapping.workbook import (
    ImportPhase,
    ImportSummary,
    check_sheet_order,
    import_single_sheet,
    import_workbook,
)
from sheetgraph.domain.model import (
    Entity,
    PropertyDescriptor,
    Rights,
    Sheet,
    TypeDescriptor,
    Workbook,
)
from tests.helpers.lookups import RecordingLookup, department_type, person_type
from tests.helpers.workbooks import make_xlsx

MAC_HEADER = ["Entity:alias", "Type:name", "Role:name", "query", "update", "remove", "create"]


def _role_type() -> TypeDescriptor:
    return TypeDescriptor(
        name="Role",
        properties=(PropertyDescriptor(name="name", required=True),),
    )


def _fresh_lookup() -> RecordingLookup:
    return RecordingLookup.with_types([person_type(), department_type(), _role_type()])


def _workbook_bytes() -> bytes:
    return make_xlsx(
        {
            "MAC": [
                MAC_HEADER,
                ["ada", None, "admin", 1, 1, None, None],
                [None, "Person", "reader", 1, None, None, None],
                [None, None, "nobody", 1, 1, 1, 1],
            ],
            "Role": [["name"], ["admin"], ["reader"]],
            "Department": [["title", "alias"], ["Sales", "sales"]],
            "Person": [
                ["name", "Department:alias", "alias", "nickname"],
                ["Ada", "sales", "ada", "Countess"],
                ["Grace", "sales", None, None],
            ],
        }
    )


def test_imports_control_role_and_data_sheets() -> None:
    lookup = _fresh_lookup()

    summary = asyncio.run(import_workbook(_workbook_bytes(), lookup, reader=read_workbook))

    assert summary.phase is ImportPhase.DONE
    assert summary.mac_grants == 2
    assert summary.entities == {"Role": 2, "Department": 1, "Person": 2}

    ada = asyncio.run(lookup.entity_by_alias("ada"))
    assert ada is not None
    assert ada.doc == {"name": "Ada", "nickname": "Countess"}
    department = ada.rel["Department"]
    assert isinstance(department, Entity)
    assert department.doc == {"title": "Sales"}
    assert ada.mac == {"reader": Rights(query=True), "admin": Rights(query=True, update=True)}


def test_control_sheet_is_stored_before_data_sheets() -> None:
    lookup = _fresh_lookup()

    asyncio.run(import_workbook(_workbook_bytes(), lookup, reader=read_workbook))

    operations = lookup.operations()
    last_grant = max(i for i, op in enumerate(operations) if op.startswith("store_mac"))
    assert last_grant < operations.index("type_by_name")


def test_sheets_are_processed_in_workbook_order() -> None:
    lookup = _fresh_lookup()

    asyncio.run(import_workbook(_workbook_bytes(), lookup, reader=read_workbook))

    added = [call[1] for call in lookup.calls if call[0] == "add"]
    assert added == ["Role", "Role", "Department", "Person", "Person"]


def test_sheet_names_default_to_import_config(monkeypatch: pytest.MonkeyPatch) -> None:
    config = ImportConfig(control_sheet="Access", role_sheet="Roles")
    monkeypatch.setattr(workbook_module, "get_import_config", lambda: config)
    roles = TypeDescriptor(name="Roles", properties=(PropertyDescriptor(name="name"),))
    lookup = RecordingLookup.with_types([roles])
    data = make_xlsx(
        {
            "Access": [MAC_HEADER, [None, "Roles", "admin", 1, None, None, None]],
            "Roles": [["name"], ["admin"]],
        }
    )

    summary = asyncio.run(import_workbook(data, lookup, reader=read_workbook))

    assert summary.mac_grants == 1
    assert summary.entities == {"Roles": 1}


def test_first_sheet_must_be_mac() -> None:
    lookup = _fresh_lookup()
    data = make_xlsx({"Person": [["name"], ["Ada"]], "MAC": [MAC_HEADER]})

    with pytest.raises(SheetOrderError, match="must be the first sheet"):
        asyncio.run(import_workbook(data, lookup, reader=read_workbook))

    assert lookup.calls == []


def test_second_sheet_must_be_role() -> None:
    lookup = _fresh_lookup()
    data = make_xlsx(
        {
            "MAC": [MAC_HEADER, [None, "Person", "reader", 1, None, None, None]],
            "Person": [["name"], ["Ada"]],
        }
    )

    with pytest.raises(SheetOrderError, match="Role must be the second sheet, was Person"):
        asyncio.run(import_workbook(data, lookup, reader=read_workbook))

    assert lookup.calls == []


def test_check_sheet_order_tracks_phase() -> None:
    workbook = Workbook(sheet_names=("MAC",), sheets=())
    summary = ImportSummary()

    with pytest.raises(SheetOrderError, match="was None"):
        check_sheet_order(workbook, ImportConfig(), summary)

    assert summary.phase is ImportPhase.EXPECT_ROLE


def test_unknown_data_sheet_type_aborts_import() -> None:
    lookup = _fresh_lookup()
    data = make_xlsx(
        {
            "MAC": [MAC_HEADER],
            "Role": [["name"], ["admin"]],
            "Planet": [["name"], ["Mars"]],
            "Department": [["title"], ["Sales"]],
        }
    )

    with pytest.raises(TypeNotFoundError):
        asyncio.run(import_workbook(data, lookup, reader=read_workbook))

    assert lookup.entities_of("Department") == []
    assert len(lookup.entities_of("Role")) == 1


def test_rejects_lookup_without_interface() -> None:
    with pytest.raises(ArgumentError, match="DataLookup"):
        asyncio.run(import_workbook(b"", object(), reader=read_workbook))  # type: ignore[arg-type]


def test_single_sheet_returns_first_row_columns() -> None:
    lookup = _fresh_lookup()
    workbook = Workbook(
        sheet_names=("Empty", "People"),
        sheets=(
            Sheet(
                name="People",
                rows=(
                    {"name": "Ada", "Department:id": "d1", "alias": "ada"},
                    {"name": "Grace", "Department:id": "d1"},
                ),
            ),
        ),
    )
    lookup.entities["d1"] = Entity(type="Department", doc={"title": "Sales"}, id="d1")

    columns = asyncio.run(
        import_single_sheet(b"ignored", "Person", lookup, reader=lambda _data: workbook)
    )

    assert columns == ["name", "Department:id", "alias"]
    assert len(lookup.entities_of("Person")) == 2
    assert "store_mac_by_alias" not in lookup.operations()


def test_single_sheet_requires_rows() -> None:
    lookup = _fresh_lookup()
    empty = Workbook(sheet_names=("Sheet",), sheets=())

    with pytest.raises(ArgumentError, match="no sheet with data rows"):
        asyncio.run(import_single_sheet(b"", "Person", lookup, reader=lambda _data: empty))
