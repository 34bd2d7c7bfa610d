"""Type schema descriptors served by the lookup."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyDescriptor:
    """One declared property of an entity type.

    ``path`` is dotted and relative to the entity document; it defaults to
    ``name``. A ``type_name`` marks the property as a relationship column.
    """

    name: str
    path: str = ""
    type_name: str | None = None
    required: bool = False

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", self.name)

    @property
    def is_relationship(self) -> bool:
        return self.type_name is not None

    @property
    def id_column(self) -> str:
        return f"{self.type_name}:id"

    @property
    def alias_column(self) -> str:
        return f"{self.type_name}:alias"


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeDescriptor:
    """Schema of an entity type; ``properties`` is ``None`` when none are declared."""

    name: str
    properties: tuple[PropertyDescriptor, ...] | None = None
