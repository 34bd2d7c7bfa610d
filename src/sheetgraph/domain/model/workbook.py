"""Parsed workbook structures handed to the mapping engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

type CellValue = object
type Row = Mapping[str, CellValue]


@dataclass(frozen=True, slots=True)
class Sheet:
    name: str
    rows: Sequence[Row] = field(default_factory=tuple[Row, ...])


@dataclass(frozen=True, slots=True)
class Workbook:
    """Sheets of a workbook.

    ``sheet_names`` lists every worksheet in workbook order, ``sheets`` only
    those carrying at least one data row.
    """

    sheet_names: tuple[str, ...]
    sheets: tuple[Sheet, ...]

    def sheet(self, name: str) -> Sheet | None:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None

    def sheets_from(self, position: int) -> tuple[Sheet, ...]:
        """Return non-empty sheets whose workbook position is ``position`` or later."""

        names = set(self.sheet_names[position:])
        return tuple(sheet for sheet in self.sheets if sheet.name in names)
