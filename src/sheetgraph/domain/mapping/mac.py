"""Translate control-sheet rows into access-control grants."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from sheetgraph.domain.errors import EntityLookupError
from sheetgraph.domain.model import Rights

from .properties import has_value

if TYPE_CHECKING:
    from sheetgraph.domain.model import Row
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)

ENTITY_ALIAS_COLUMN: Final[str] = "Entity:alias"
TYPE_NAME_COLUMN: Final[str] = "Type:name"
ROLE_NAME_COLUMN: Final[str] = "Role:name"


def rights_from_row(row: Row) -> Rights:
    """Read the four rights flags from ``row`` using plain truthiness."""

    return Rights.from_mapping(row)


async def store_row_mac(lookup: DataLookup, row: Row) -> Rights | None:
    """Store the grant declared by ``row`` by alias or by type.

    Rows naming neither an entity alias nor a type are skipped and ``None`` is
    returned.
    """

    rights = rights_from_row(row)
    role = row.get(ROLE_NAME_COLUMN)
    role_name = None if role is None else str(role)

    if has_value(row, ENTITY_ALIAS_COLUMN):
        alias = str(row[ENTITY_ALIAS_COLUMN])
        operation = "store_mac_by_alias"
        call = lookup.store_mac_by_alias(alias, role_name, rights)
    elif has_value(row, TYPE_NAME_COLUMN):
        type_name = str(row[TYPE_NAME_COLUMN])
        operation = "store_mac_by_type"
        call = lookup.store_mac_by_type(type_name, role_name, rights)
    else:
        log.debug("Skipping MAC row without %s or %s", ENTITY_ALIAS_COLUMN, TYPE_NAME_COLUMN)
        return None

    try:
        await call
    except Exception as exc:
        raise EntityLookupError(f"Lookup {operation} failed: {exc}", operation=operation) from exc
    return rights
