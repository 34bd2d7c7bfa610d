"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from sheetgraph.adapters.memory import InMemoryDataLookup
from sheetgraph.adapters.schema import load_type_schemas
from sheetgraph.adapters.sqlalchemy import SqlAlchemyDataLookup, is_started, startup
from sheetgraph.adapters.xlsx import read_workbook
from sheetgraph.config import MissingConfigurationError
from sheetgraph.domain.mapping import import_single_sheet, import_workbook

if TYPE_CHECKING:
    from pathlib import Path

    from sheetgraph.domain.mapping import ImportSummary
    from sheetgraph.domain.model import TypeDescriptor
    from sheetgraph.domain.ports import DataLookup, WorkbookReader

log = getLogger(__name__)


def read_type_file(path: Path) -> list[TypeDescriptor]:
    if not path.is_file():
        raise MissingConfigurationError(f"Type schema file not found: {path}")
    return load_type_schemas(path)


def build_lookup(*, dry_run: bool = False, types_path: Path | None = None) -> DataLookup:
    """Return the lookup an import should run against.

    A dry run keeps everything in memory; otherwise the SQL store is used,
    starting the adapter on first use.
    """

    descriptors = read_type_file(types_path) if types_path is not None else []
    if dry_run:
        return InMemoryDataLookup.with_types(descriptors)

    if not is_started():
        startup()
    lookup = SqlAlchemyDataLookup()
    for descriptor in descriptors:
        lookup.register_type(descriptor)
    return lookup


def load_types(path: Path) -> list[TypeDescriptor]:
    """Register every type of a schema file in the SQL store."""

    descriptors = read_type_file(path)
    if not is_started():
        startup()
    lookup = SqlAlchemyDataLookup()
    for descriptor in descriptors:
        lookup.register_type(descriptor)
    return descriptors


def import_workbook_file(
    path: Path,
    *,
    lookup: DataLookup | None = None,
    reader: WorkbookReader = read_workbook,
) -> ImportSummary:
    """Import a full workbook (control sheet, role sheet, data sheets)."""

    effective_lookup = lookup or build_lookup()
    log.info("Starting workbook import: path=%s", path)
    summary = asyncio.run(import_workbook(path.read_bytes(), effective_lookup, reader=reader))
    log.info(
        f"Finished workbook import: grants={summary.mac_grants}, "
        f"entities={summary.total_entities}, sheets={list(summary.entities)}"
    )
    return summary


def import_sheet_file(
    path: Path,
    type_name: str,
    *,
    lookup: DataLookup | None = None,
    reader: WorkbookReader = read_workbook,
) -> list[str]:
    """Import the first sheet of a workbook as entities of ``type_name``."""

    effective_lookup = lookup or build_lookup()
    log.info("Starting sheet import: path=%s, type=%s", path, type_name)
    columns = asyncio.run(
        import_single_sheet(path.read_bytes(), type_name, effective_lookup, reader=reader)
    )
    log.info("Finished sheet import: columns=%s", columns)
    return columns
