"""SQLAlchemy table metadata for stored types, entities and MAC grants."""

from __future__ import annotations

import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class GrantScope(StrEnum):
    ALIAS = "alias"
    TYPE = "type"


def _json_default(value: object) -> object:
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class DocumentJSON(TypeDecorator[Any]):
    """JSON column accepting spreadsheet cell values such as datetimes."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        _ = dialect
        if value is None:
            return None
        return json.loads(json.dumps(value, default=_json_default))


metadata = MetaData()

entity_type_table = Table(
    "entity_types",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("definition", DocumentJSON(), nullable=False),
)

entity_table = Table(
    "entities",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(32), nullable=False, unique=True),
    Column("type", String(255), nullable=False),
    Column("alias", String(255), nullable=True),
    Column("doc", DocumentJSON(), nullable=False),
    Column("rel", DocumentJSON(), nullable=False),
    Column("mac", DocumentJSON(), nullable=True),
    Index("ix_entities_type", "type"),
    Index("ix_entities_alias", "alias"),
)

mac_grant_table = Table(
    "mac_grants",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", Enum(GrantScope, native_enum=False, length=16), nullable=False),
    Column("target", String(255), nullable=False),
    Column("role", String(255), nullable=True),
    Column("can_query", Boolean, nullable=False, default=False),
    Column("can_update", Boolean, nullable=False, default=False),
    Column("can_remove", Boolean, nullable=False, default=False),
    Column("can_create", Boolean, nullable=False, default=False),
    Index("ix_mac_grants_scope_target", "scope", "target"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
