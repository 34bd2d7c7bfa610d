"""Map every row of one worksheet to entities of one type."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from sheetgraph.domain.errors import ArgumentError

from .builder import build_entity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sheetgraph.domain.model import Entity, Row
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)


async def map_sheet(
    type_name: str, rows: Sequence[Row] | None, lookup: DataLookup | None
) -> list[Entity]:
    """Build an entity for every row, dispatching all rows at once.

    Waits for every row pipeline to settle. When any row failed, the first
    failure in row order is raised; entities already added stay added.
    """

    if rows is None or not type_name or lookup is None:
        raise ArgumentError(
            f"Invalid parameters: type_name={type_name!r}, "
            f"rows={'missing' if rows is None else len(rows)}, lookup={lookup!r}"
        )

    outcomes = await asyncio.gather(
        *(build_entity(type_name, lookup, row) for row in rows),
        return_exceptions=True,
    )

    entities: list[Entity] = []
    failures: list[tuple[int, BaseException]] = []
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, BaseException):
            failures.append((index, outcome))
        else:
            entities.append(outcome)

    if failures:
        for index, failure in failures[1:]:
            log.error("Row %s of %s failed: %s", index + 1, type_name, failure)
        index, first = failures[0]
        log.error(
            "Mapping %s failed on row %s (%s of %s rows added)",
            type_name,
            index + 1,
            len(entities),
            len(rows),
        )
        raise first

    log.info("Mapped %s %s rows", len(entities), type_name)
    return entities
