"""openpyxl-backed workbook reader."""

from __future__ import annotations

from io import BytesIO
from logging import getLogger
from typing import TYPE_CHECKING

from openpyxl import load_workbook

from sheetgraph.domain.model import Row, Sheet, Workbook

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from openpyxl.worksheet.worksheet import Worksheet

    from sheetgraph.domain.ports import WorkbookReader

log = getLogger(__name__)


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _header(values: Sequence[object]) -> list[str | None]:
    return [None if _is_blank(value) else str(value).strip() for value in values]


def rows_from_values(values: Iterable[Sequence[object]]) -> list[Row]:
    """Turn raw sheet values (header row first) into row mappings.

    Blank cells are left out of each row and blank rows are skipped. Columns
    without a header are ignored.
    """

    iterator = iter(values)
    first = next(iterator, None)
    if first is None:
        return []
    header = _header(first)

    rows: list[Row] = []
    for raw in iterator:
        row: dict[str, object] = {}
        for column, value in zip(header, raw, strict=False):
            if column is None or _is_blank(value):
                continue
            row[column] = value
        if row:
            rows.append(row)
    return rows


def _sheet_rows(worksheet: Worksheet) -> list[Row]:
    return rows_from_values(worksheet.iter_rows(values_only=True))


def read_workbook(data: bytes) -> Workbook:
    """Parse ``.xlsx`` bytes into a ``Workbook`` of row mappings."""

    book = load_workbook(BytesIO(data), read_only=True, data_only=True)
    try:
        names = tuple(book.sheetnames)
        sheets: list[Sheet] = []
        for name in names:
            rows = _sheet_rows(book[name])
            if not rows:
                log.debug("Skipping empty sheet %s", name)
                continue
            sheets.append(Sheet(name=name, rows=tuple(rows)))
    finally:
        book.close()
    return Workbook(sheet_names=names, sheets=tuple(sheets))


if TYPE_CHECKING:
    _reader_check: WorkbookReader = read_workbook
