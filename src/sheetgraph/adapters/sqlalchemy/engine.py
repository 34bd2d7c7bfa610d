"""Engine and session state for the SQLAlchemy lookup."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from sheetgraph.config import get_database_config

from .tables import create_all_tables

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the store is used before ``startup`` or started twice."""


@dataclass(slots=True)
class _Connection:
    engine: Engine
    sessions: sessionmaker[Session]


@dataclass(slots=True)
class _Store:
    connection: _Connection | None = None


_STORE = _Store()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the lookup to ``engine`` (or a new one) and create missing tables."""

    if _STORE.connection is not None and not force:
        raise StartupError("Entity store already started; pass force=True to rebind it")

    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    create_all_tables(bound)
    sessions = sessionmaker(bind=bound, expire_on_commit=False)
    _STORE.connection = _Connection(engine=bound, sessions=sessions)
    log.debug("Entity store bound to %s", bound.url)


def configured_engine() -> Engine | None:
    connection = _STORE.connection
    return None if connection is None else connection.engine


def is_started() -> bool:
    return _STORE.connection is not None


def shutdown() -> None:
    """Dispose the bound engine; safe to call when nothing is started."""

    if _STORE.connection is not None:
        _STORE.connection.engine.dispose()
    _STORE.connection = None


def session_factory() -> sessionmaker[Session]:
    connection = _STORE.connection
    if connection is None:
        raise StartupError(
            "Entity store not started; call sheetgraph.adapters.sqlalchemy.startup()"
        )
    return connection.sessions
