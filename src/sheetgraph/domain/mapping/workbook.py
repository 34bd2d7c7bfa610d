"""Sequence control-sheet and data-sheet processing over a workbook."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from sheetgraph.config.importer import get_import_config
from sheetgraph.domain.errors import ArgumentError, SheetOrderError
from sheetgraph.domain.ports import ensure_lookup

from .mac import store_row_mac
from .sheets import map_sheet

if TYPE_CHECKING:
    from sheetgraph.config.importer import ImportConfig
    from sheetgraph.domain.model import Workbook
    from sheetgraph.domain.ports import DataLookup, WorkbookReader

log = getLogger(__name__)


class ImportPhase(StrEnum):
    EXPECT_MAC = "expect_mac"
    EXPECT_ROLE = "expect_role"
    PROCESS_DATA = "process_data"
    DONE = "done"


@dataclass(slots=True)
class ImportSummary:
    """Outcome of a full workbook import."""

    mac_grants: int = 0
    entities: dict[str, int] = field(default_factory=dict[str, int])
    phase: ImportPhase = ImportPhase.EXPECT_MAC

    @property
    def total_entities(self) -> int:
        return sum(self.entities.values())


def _sheet_name_at(workbook: Workbook, position: int) -> str | None:
    names = workbook.sheet_names
    return names[position] if len(names) > position else None


def check_sheet_order(workbook: Workbook, config: ImportConfig, summary: ImportSummary) -> None:
    """Raise ``SheetOrderError`` unless the control and role sheets lead the workbook."""

    summary.phase = ImportPhase.EXPECT_MAC
    if _sheet_name_at(workbook, 0) != config.control_sheet:
        raise SheetOrderError(
            f"{config.control_sheet} (Mandatory Access Control) must be the first sheet"
        )

    summary.phase = ImportPhase.EXPECT_ROLE
    found = _sheet_name_at(workbook, 1)
    if found != config.role_sheet:
        raise SheetOrderError(f"{config.role_sheet} must be the second sheet, was {found}")


async def import_workbook(
    data: bytes,
    lookup: DataLookup,
    *,
    reader: WorkbookReader,
    config: ImportConfig | None = None,
) -> ImportSummary:
    """Import access grants and every data sheet of a workbook.

    The control sheet rows are stored first. Afterwards each non-empty sheet
    from the second position on, the role sheet included, is mapped using its
    own name as entity type, one sheet at a time.
    """

    active_lookup = ensure_lookup(lookup)
    active_config = config or get_import_config()
    workbook = reader(data)
    summary = ImportSummary()

    check_sheet_order(workbook, active_config, summary)

    control = workbook.sheet(active_config.control_sheet)
    control_rows = control.rows if control is not None else ()
    stored = await asyncio.gather(*(store_row_mac(active_lookup, row) for row in control_rows))
    summary.mac_grants = sum(1 for rights in stored if rights is not None)
    log.info("Stored %s MAC grants from %s rows", summary.mac_grants, len(control_rows))

    # the role sheet rows are mapped like any data sheet
    summary.phase = ImportPhase.PROCESS_DATA
    for sheet in workbook.sheets_from(1):
        log.info("Importing sheet %s (%s rows)", sheet.name, len(sheet.rows))
        entities = await map_sheet(sheet.name, sheet.rows, active_lookup)
        summary.entities[sheet.name] = len(entities)

    summary.phase = ImportPhase.DONE
    log.info(
        "Workbook import finished: grants=%s, entities=%s",
        summary.mac_grants,
        summary.total_entities,
    )
    return summary


async def import_single_sheet(
    data: bytes,
    type_name: str,
    lookup: DataLookup,
    *,
    reader: WorkbookReader,
) -> list[str]:
    """Map the first non-empty sheet against ``type_name``.

    Returns the column names of the sheet's first row, for previews.
    """

    active_lookup = ensure_lookup(lookup)
    workbook = reader(data)
    if not workbook.sheets:
        raise ArgumentError("Workbook has no sheet with data rows")

    sheet = workbook.sheets[0]
    await map_sheet(type_name, sheet.rows, active_lookup)
    return list(sheet.rows[0])
