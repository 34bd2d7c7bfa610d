"""Port for the data lookup collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sheetgraph.domain.errors import ArgumentError

if TYPE_CHECKING:
    from sheetgraph.domain.model import Entity, MacGrants, Rights, TypeDescriptor


@runtime_checkable
class DataLookup(Protocol):
    """Schema, entity and access-control operations used during an import.

    Every operation is awaitable except ``retrieve_mac``, which returns its
    value directly. Implementations must tolerate concurrent calls from
    several row pipelines of the same sheet.
    """

    async def type_by_name(self, type_name: str) -> TypeDescriptor | None:
        """Return the schema for ``type_name`` or ``None`` when unknown."""
        ...

    async def entity_by_id(self, entity_id: str) -> Entity | None: ...

    async def entity_by_alias(self, alias: str) -> Entity | None: ...

    async def add(self, type_name: str, entity: Entity) -> None:
        """Take ownership of a finished entity."""
        ...

    async def store_mac_by_alias(self, alias: str, role_name: str | None, rights: Rights) -> None: ...

    async def store_mac_by_type(
        self, type_name: str, role_name: str | None, rights: Rights
    ) -> None: ...

    def retrieve_mac(self, alias: str | None, type_name: str) -> MacGrants: ...


def ensure_lookup(lookup: object) -> DataLookup:
    """Return ``lookup`` if it provides every ``DataLookup`` operation."""

    if lookup is None or not isinstance(lookup, DataLookup):
        raise ArgumentError(
            f"Lookup {type(lookup).__name__} does not implement the DataLookup interface"
        )
    return lookup
