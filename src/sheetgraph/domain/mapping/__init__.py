"""Row-to-entity mapping engine.

Columns are split into document paths (``paths``), applied onto entities with
schema validation (``properties``), relationship references are resolved
through the lookup (``resolver``) and finished entities are added one row at a
time (``builder``, ``sheets``). ``mac`` turns control-sheet rows into grants and
``workbook`` sequences the sheets of a workbook.
"""

from __future__ import annotations

from .builder import build_entity, fetch_properties
from .mac import rights_from_row, store_row_mac
from .paths import assign, column_path, property_path
from .properties import apply_row, residual_columns
from .resolver import resolve_relationships
from .sheets import map_sheet
from .workbook import (
    ImportPhase,
    ImportSummary,
    check_sheet_order,
    import_single_sheet,
    import_workbook,
)

__all__ = [
    "ImportPhase",
    "ImportSummary",
    "apply_row",
    "assign",
    "build_entity",
    "check_sheet_order",
    "column_path",
    "fetch_properties",
    "import_single_sheet",
    "import_workbook",
    "map_sheet",
    "property_path",
    "residual_columns",
    "resolve_relationships",
    "rights_from_row",
    "store_row_mac",
]
