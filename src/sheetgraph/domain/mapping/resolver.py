"""Resolve relationship placeholders into related entities."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sheetgraph.domain.errors import EntityLookupError
from sheetgraph.domain.model import RelationshipRef

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from sheetgraph.domain.model import Entity, RelationshipValue
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)


async def resolve_relationships(entity: Entity, lookup: DataLookup) -> None:
    """Replace every ``RelationshipRef`` in ``entity.rel`` with the related entity.

    References are resolved one after the other in ``rel`` order; values that
    are not references are left untouched.
    """

    for type_name in list(entity.rel):
        entity.rel[type_name] = await resolve_value(entity.rel[type_name], lookup)


async def resolve_value(value: RelationshipValue, lookup: DataLookup) -> RelationshipValue:
    if not isinstance(value, RelationshipRef):
        return value
    if value.id is not None:
        return await _fetch("entity_by_id", value.id, lookup.entity_by_id(value.id))
    alias = value.alias or ""
    return await _fetch("entity_by_alias", alias, lookup.entity_by_alias(alias))


async def _fetch(operation: str, key: str, call: Awaitable[Entity | None]) -> Entity:
    try:
        related = await call
    except Exception as exc:
        raise EntityLookupError(
            f"Lookup {operation}({key!r}) failed: {exc}", operation=operation
        ) from exc
    if related is None:
        raise EntityLookupError(f"Lookup {operation}({key!r}) found nothing", operation=operation)
    log.debug("Resolved %s(%r) to %s entity", operation, key, related.type)
    return related
