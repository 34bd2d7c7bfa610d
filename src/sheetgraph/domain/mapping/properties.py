"""Apply a spreadsheet row onto an entity according to its type schema."""

from __future__ import annotations

from collections.abc import MutableMapping
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from sheetgraph.domain.errors import ValidationError
from sheetgraph.domain.model import Entity, RelationshipRef

from .paths import DOC_SEGMENT, assign, column_path, property_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sheetgraph.domain.model import PropertyDescriptor, Row
    from sheetgraph.domain.model.entity import RelationshipValue

    from .paths import Path

log = getLogger(__name__)

ALIAS_COLUMN: Final[str] = "alias"


def has_value(row: Row, column: str) -> bool:
    """Blank cells (missing, ``None`` or the empty string) count as absent."""

    value = row.get(column)
    return value is not None and value != ""


def apply_row(entity: Entity, properties: Iterable[PropertyDescriptor], row: Row) -> set[str]:
    """Fill ``entity`` from ``row`` and return the columns consumed by the schema.

    Declared properties are applied first, then the ``alias`` column, then every
    remaining column is stored under the path derived from its name.
    """

    consumed: set[str] = set()
    for prop in properties:
        consumed.update(_apply_property(entity, prop, row))

    if has_value(row, ALIAS_COLUMN):
        entity.alias = str(row[ALIAS_COLUMN])
        consumed.add(ALIAS_COLUMN)

    for column, value in row.items():
        if column in consumed or value is None:
            continue
        _assign_column(entity, column, value, row)

    return consumed


def _apply_property(entity: Entity, prop: PropertyDescriptor, row: Row) -> tuple[str, ...]:
    if has_value(row, prop.name):
        _write(entity.doc, property_path(prop.path), row[prop.name], prop.name, row)
        return (prop.name,)

    if prop.is_relationship:
        type_name = prop.type_name or ""
        if has_value(row, prop.id_column):
            entity.rel[type_name] = RelationshipRef(id=str(row[prop.id_column]))
            return (prop.id_column,)
        if has_value(row, prop.alias_column):
            entity.rel[type_name] = RelationshipRef(alias=str(row[prop.alias_column]))
            return (prop.alias_column,)

    if prop.required:
        message = f"Missing required property [{prop.name}] on row {dict(row)!r}"
        if prop.is_relationship:
            message += (
                f" and [id] is missing: {prop.id_column}"
                f" or [alias] is missing: {prop.alias_column}"
            )
        raise ValidationError(
            message,
            property_name=prop.name,
            row=row,
        )
    # optional and no way to find it again
    return ()


def _write(
    target: MutableMapping[str, Any], segments: Path, value: object, column: str, row: Row
) -> None:
    try:
        assign(target, segments, value)
    except ValueError as exc:
        raise ValidationError(
            f"Column [{column}] clashes with an existing value on row {dict(row)!r}: {exc}",
            property_name=column,
            row=row,
        ) from exc


def _assign_column(entity: Entity, column: str, value: object, row: Row) -> None:
    path = column_path(column)
    head, rest = path[0], path[1:]
    if head == DOC_SEGMENT:
        _write(entity.doc, rest, value, column, row)
        return

    # head == REL_SEGMENT: rest is (<qualifier>, ...)
    qualifier, inner = rest[0], rest[1:]
    current: RelationshipValue | None = entity.rel.get(qualifier)
    if isinstance(current, (RelationshipRef, Entity)):
        log.warning(
            "Dropping column %r: relationship %r is already set by reference", column, qualifier
        )
        return
    if not isinstance(current, MutableMapping):
        current = {}
        entity.rel[qualifier] = current
    _write(current, inner, value, column, row)


def residual_columns(row: Row, consumed: Iterable[str]) -> list[str]:
    """Columns of ``row`` not claimed by the schema or the alias column."""

    taken = set(consumed)
    return [column for column in row if column not in taken]


__all__ = ["ALIAS_COLUMN", "apply_row", "has_value", "residual_columns"]
