"""Port for spreadsheet parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sheetgraph.domain.model import Workbook


@runtime_checkable
class WorkbookReader(Protocol):
    """Callable port turning raw spreadsheet bytes into sheets of row mappings."""

    def __call__(self, data: bytes) -> Workbook: ...


__all__ = ["WorkbookReader"]
