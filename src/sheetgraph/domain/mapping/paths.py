"""Column-name and property-path splitting."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Final

COLUMN_QUALIFIER_SEPARATOR: Final[str] = ":"
PROPERTY_PATH_SEPARATOR: Final[str] = "."

REL_SEGMENT: Final[str] = "rel"
DOC_SEGMENT: Final[str] = "doc"

type Path = tuple[str, ...]


def column_path(column: str) -> Path:
    """Turn ``Department:Manager:name`` into ``rel/Department/rel/Manager/doc/name``.

    Every qualifier before the last ``:`` becomes a ``rel`` hop; the final part
    lands under ``doc``. Dots inside a part nest like schema paths, so
    ``Team:info.size`` ends at ``rel/Team/doc/info/size``. Empty parts are kept
    as empty keys.
    """

    *qualifiers, name = column.split(COLUMN_QUALIFIER_SEPARATOR)
    segments: list[str] = []
    for qualifier in qualifiers:
        segments.extend((REL_SEGMENT, *property_path(qualifier)))
    segments.extend((DOC_SEGMENT, *property_path(name)))
    return tuple(segments)


def property_path(path: str) -> Path:
    """Split a schema-declared dotted path such as ``address.city``."""

    return tuple(path.split(PROPERTY_PATH_SEPARATOR))


def assign(target: MutableMapping[str, Any], segments: Path, value: object) -> None:
    """Write ``value`` at ``segments`` below ``target``.

    Missing intermediate levels are created as empty dicts and existing mappings
    are reused. A scalar already sitting on the way raises ``ValueError``.
    """

    if not segments:
        raise ValueError("Cannot assign to an empty path")
    location = target
    for depth, segment in enumerate(segments[:-1], start=1):
        child = location.get(segment)
        if child is None:
            child = {}
            location[segment] = child
        elif not isinstance(child, MutableMapping):
            full = PROPERTY_PATH_SEPARATOR.join(segments)
            taken = PROPERTY_PATH_SEPARATOR.join(segments[:depth])
            raise ValueError(f"Cannot assign {full}: {taken} already holds {child!r}")
        location = child
    location[segments[-1]] = value
