"""Mandatory access control values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from enum import StrEnum


class Right(StrEnum):
    QUERY = "query"
    UPDATE = "update"
    REMOVE = "remove"
    CREATE = "create"


@dataclass(frozen=True, slots=True, kw_only=True)
class Rights:
    """Rights granted to a role on an entity alias or on a whole type."""

    query: bool = False
    update: bool = False
    remove: bool = False
    create: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> Rights:
        return cls(**{right.value: bool(values.get(right.value)) for right in Right})


type MacGrants = Mapping[str, Rights]
