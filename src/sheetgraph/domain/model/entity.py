"""Entity records produced from spreadsheet rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sheetgraph.domain.model.rights import MacGrants


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipRef:
    """Unresolved reference to another entity, by id or by alias."""

    id: str | None = None
    alias: str | None = None

    def __post_init__(self) -> None:
        if (self.id is None) == (self.alias is None):
            raise ValueError("RelationshipRef requires exactly one of id or alias")


type RelationshipValue = RelationshipRef | Entity | dict[str, Any]


@dataclass(eq=False, kw_only=True)
class Entity:
    """One structured record built from a spreadsheet row.

    ``doc`` holds the nested scalar document, ``rel`` the relationships keyed by
    the related type name. A ``rel`` entry starts out as a ``RelationshipRef``
    and is replaced by the related ``Entity`` once resolved.
    """

    type: str
    doc: dict[str, Any] = field(default_factory=dict[str, Any])
    rel: dict[str, RelationshipValue] = field(default_factory=dict[str, "RelationshipValue"])
    alias: str | None = None
    mac: MacGrants | None = None

    # assigned by the store on add
    id: str | None = None

    @property
    def pending_references(self) -> dict[str, RelationshipRef]:
        return {
            name: value for name, value in self.rel.items() if isinstance(value, RelationshipRef)
        }

    @property
    def is_resolved(self) -> bool:
        return not self.pending_references

    def as_document(self) -> dict[str, Any]:
        """Return a JSON-compatible view of the entity, nesting resolved relations."""

        rel: dict[str, Any] = {}
        for name, value in self.rel.items():
            if isinstance(value, Entity):
                rel[name] = value.as_document()
            elif isinstance(value, RelationshipRef):
                rel[name] = {"id": value.id} if value.id is not None else {"alias": value.alias}
            else:
                rel[name] = value
        document: dict[str, Any] = {"type": self.type, "doc": self.doc, "rel": rel}
        if self.id is not None:
            document["id"] = self.id
        if self.alias is not None:
            document["alias"] = self.alias
        if self.mac is not None:
            document["mac"] = {role: rights.as_dict() for role, rights in self.mac.items()}
        return document
