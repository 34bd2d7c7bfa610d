"""Build one committed entity from one spreadsheet row."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sheetgraph.domain.errors import (
    EntityLookupError,
    SchemaError,
    SheetImportError,
    TypeNotFoundError,
)
from sheetgraph.domain.model import Entity

from .properties import apply_row, residual_columns
from .resolver import resolve_relationships

if TYPE_CHECKING:
    from sheetgraph.domain.model import PropertyDescriptor, Row
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)


async def fetch_properties(type_name: str, lookup: DataLookup) -> tuple[PropertyDescriptor, ...]:
    """Return the declared properties of ``type_name``."""

    try:
        descriptor = await lookup.type_by_name(type_name)
    except SheetImportError:
        raise
    except Exception as exc:
        raise EntityLookupError(
            f"Lookup type_by_name({type_name!r}) failed: {exc}", operation="type_by_name"
        ) from exc
    if descriptor is None:
        raise TypeNotFoundError(type_name)
    if descriptor.properties is None:
        raise SchemaError(type_name)
    return descriptor.properties


async def build_entity(type_name: str, lookup: DataLookup, row: Row) -> Entity:
    """Map ``row`` to an entity of ``type_name``, resolve its relations and add it."""

    properties = await fetch_properties(type_name, lookup)

    entity = Entity(type=type_name)
    consumed = apply_row(entity, properties, row)
    log.debug(
        "Row mapped to %s: alias=%s, ad-hoc columns=%s",
        type_name,
        entity.alias,
        residual_columns(row, consumed),
    )

    # synchronous by contract, unlike every other lookup operation
    try:
        entity.mac = lookup.retrieve_mac(entity.alias, type_name)
    except Exception as exc:
        raise EntityLookupError(
            f"Lookup retrieve_mac({entity.alias!r}, {type_name!r}) failed: {exc}",
            operation="retrieve_mac",
        ) from exc

    await resolve_relationships(entity, lookup)

    try:
        await lookup.add(type_name, entity)
    except Exception as exc:
        raise EntityLookupError(f"Lookup add({type_name!r}) failed: {exc}", operation="add") from exc
    return entity
