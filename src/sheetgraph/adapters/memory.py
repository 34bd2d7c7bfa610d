"""In-memory ``DataLookup`` used for dry runs and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Self
from uuid import uuid4

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sheetgraph.domain.model import Entity, MacGrants, Rights, TypeDescriptor
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)

type RoleGrants = dict[str | None, Rights]


@dataclass(slots=True)
class InMemoryDataLookup:
    """Dict-backed lookup keeping everything an import produces."""

    types: dict[str, TypeDescriptor] = field(default_factory=dict[str, "TypeDescriptor"])
    entities: dict[str, Entity] = field(default_factory=dict[str, "Entity"])
    aliases: dict[str, str] = field(default_factory=dict[str, str])
    mac_by_alias: dict[str, RoleGrants] = field(default_factory=dict[str, "RoleGrants"])
    mac_by_type: dict[str, RoleGrants] = field(default_factory=dict[str, "RoleGrants"])

    @classmethod
    def with_types(cls, descriptors: Iterable[TypeDescriptor]) -> Self:
        lookup = cls()
        for descriptor in descriptors:
            lookup.register_type(descriptor)
        return lookup

    def register_type(self, descriptor: TypeDescriptor) -> None:
        self.types[descriptor.name] = descriptor

    def entities_of(self, type_name: str) -> list[Entity]:
        return [entity for entity in self.entities.values() if entity.type == type_name]

    async def type_by_name(self, type_name: str) -> TypeDescriptor | None:
        return self.types.get(type_name)

    async def entity_by_id(self, entity_id: str) -> Entity | None:
        return self.entities.get(entity_id)

    async def entity_by_alias(self, alias: str) -> Entity | None:
        entity_id = self.aliases.get(alias)
        return None if entity_id is None else self.entities.get(entity_id)

    async def add(self, type_name: str, entity: Entity) -> None:
        entity.id = entity.id or uuid4().hex
        self.entities[entity.id] = entity
        if entity.alias is None:
            return
        if entity.alias in self.aliases:
            log.warning("Alias %r re-used by a new %s entity", entity.alias, type_name)
            return
        self.aliases[entity.alias] = entity.id

    async def store_mac_by_alias(self, alias: str, role_name: str | None, rights: Rights) -> None:
        self.mac_by_alias.setdefault(alias, {})[role_name] = rights

    async def store_mac_by_type(self, type_name: str, role_name: str | None, rights: Rights) -> None:
        self.mac_by_type.setdefault(type_name, {})[role_name] = rights

    def retrieve_mac(self, alias: str | None, type_name: str) -> MacGrants:
        grants: dict[str, Rights] = {}
        sources = [self.mac_by_type.get(type_name, {})]
        if alias is not None:
            sources.append(self.mac_by_alias.get(alias, {}))
        for source in sources:
            for role, rights in source.items():
                grants[role or ""] = rights
        return grants


if TYPE_CHECKING:
    _lookup_check: DataLookup = InMemoryDataLookup()
