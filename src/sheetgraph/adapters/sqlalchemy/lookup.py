"""``DataLookup`` implementation persisting to a SQL database."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import and_, insert, or_, select, update

from sheetgraph.adapters.schema import TypeSchemaPayload, descriptor_to_payload
from sheetgraph.domain.model import Entity, Rights

from .engine import session_factory as default_session_factory
from .tables import GrantScope, entity_table, entity_type_table, mac_grant_table

if TYPE_CHECKING:
    from sqlalchemy import Row as SqlRow
    from sqlalchemy.orm import Session, sessionmaker

    from sheetgraph.domain.model import MacGrants, RelationshipValue, TypeDescriptor
    from sheetgraph.domain.ports import DataLookup

log = getLogger(__name__)


def _rel_to_storage(rel: dict[str, RelationshipValue]) -> dict[str, Any]:
    stored: dict[str, Any] = {}
    for name, value in rel.items():
        if isinstance(value, Entity):
            stored[name] = value.as_document()
        elif isinstance(value, dict):
            stored[name] = value
        else:
            raise ValueError(f"Relationship {name!r} is still unresolved")
    return stored


def _mac_from_storage(payload: dict[str, dict[str, bool]] | None) -> MacGrants | None:
    if payload is None:
        return None
    return {role: Rights.from_mapping(values) for role, values in payload.items()}


def _entity_from_row(row: SqlRow[Any]) -> Entity:
    return Entity(
        id=row.id,
        type=row.type,
        alias=row.alias,
        doc=dict(row.doc),
        rel=dict(row.rel),
        mac=_mac_from_storage(row.mac),
    )


class SqlAlchemyDataLookup:
    """Lookup storing one row per entity, each ``add`` committed on its own."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory or default_session_factory()

    def register_type(self, descriptor: TypeDescriptor) -> None:
        definition = descriptor_to_payload(descriptor)
        with self._session_factory.begin() as session:
            exists = session.execute(
                select(entity_type_table.c.name).where(entity_type_table.c.name == descriptor.name)
            ).scalar_one_or_none()
            if exists is None:
                session.execute(
                    insert(entity_type_table).values(name=descriptor.name, definition=definition)
                )
            else:
                session.execute(
                    update(entity_type_table)
                    .where(entity_type_table.c.name == descriptor.name)
                    .values(definition=definition)
                )
        log.info("Registered type %s", descriptor.name)

    async def type_by_name(self, type_name: str) -> TypeDescriptor | None:
        with self._session_factory() as session:
            definition = session.execute(
                select(entity_type_table.c.definition).where(
                    entity_type_table.c.name == type_name
                )
            ).scalar_one_or_none()
        if definition is None:
            return None
        return TypeSchemaPayload.model_validate(definition).to_descriptor()

    async def entity_by_id(self, entity_id: str) -> Entity | None:
        return self._first_entity(entity_table.c.id == entity_id)

    async def entity_by_alias(self, alias: str) -> Entity | None:
        return self._first_entity(entity_table.c.alias == alias)

    def _first_entity(self, condition: Any) -> Entity | None:
        with self._session_factory() as session:
            # earliest insert wins when an alias is reused
            statement = select(entity_table).where(condition).order_by(entity_table.c.seq)
            row = session.execute(statement.limit(1)).first()
        return None if row is None else _entity_from_row(row)

    async def add(self, type_name: str, entity: Entity) -> None:
        entity_id = entity.id or uuid4().hex
        mac = None
        if entity.mac is not None:
            mac = {role: rights.as_dict() for role, rights in entity.mac.items()}
        with self._session_factory.begin() as session:
            session.execute(
                insert(entity_table).values(
                    id=entity_id,
                    type=type_name,
                    alias=entity.alias,
                    doc=entity.doc,
                    rel=_rel_to_storage(entity.rel),
                    mac=mac,
                )
            )
        entity.id = entity_id

    async def store_mac_by_alias(self, alias: str, role_name: str | None, rights: Rights) -> None:
        self._store_grant(GrantScope.ALIAS, alias, role_name, rights)

    async def store_mac_by_type(self, type_name: str, role_name: str | None, rights: Rights) -> None:
        self._store_grant(GrantScope.TYPE, type_name, role_name, rights)

    def _store_grant(
        self, scope: GrantScope, target: str, role_name: str | None, rights: Rights
    ) -> None:
        role_column = mac_grant_table.c.role
        condition = and_(
            mac_grant_table.c.scope == scope,
            mac_grant_table.c.target == target,
            role_column.is_(None) if role_name is None else role_column == role_name,
        )
        values = {
            "can_query": rights.query,
            "can_update": rights.update,
            "can_remove": rights.remove,
            "can_create": rights.create,
        }
        with self._session_factory.begin() as session:
            existing = session.execute(
                select(mac_grant_table.c.id).where(condition).limit(1)
            ).scalar_one_or_none()
            if existing is None:
                session.execute(
                    insert(mac_grant_table).values(
                        scope=scope, target=target, role=role_name, **values
                    )
                )
            else:
                session.execute(
                    update(mac_grant_table).where(mac_grant_table.c.id == existing).values(**values)
                )

    def retrieve_mac(self, alias: str | None, type_name: str) -> MacGrants:
        scopes = [
            and_(mac_grant_table.c.scope == GrantScope.TYPE, mac_grant_table.c.target == type_name)
        ]
        if alias is not None:
            scopes.append(
                and_(mac_grant_table.c.scope == GrantScope.ALIAS, mac_grant_table.c.target == alias)
            )
        with self._session_factory() as session:
            rows = session.execute(select(mac_grant_table).where(or_(*scopes))).all()

        grants: dict[str, Rights] = {}
        # type grants first so alias grants override them per role
        for row in sorted(rows, key=lambda item: item.scope == GrantScope.ALIAS):
            grants[row.role or ""] = Rights(
                query=row.can_query,
                update=row.can_update,
                remove=row.can_remove,
                create=row.can_create,
            )
        return grants


if TYPE_CHECKING:
    _lookup_check: DataLookup = SqlAlchemyDataLookup()
