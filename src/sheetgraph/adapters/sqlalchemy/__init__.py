"""SQLAlchemy adapter package for sheetgraph."""

from __future__ import annotations

from .engine import StartupError, configured_engine, is_started, shutdown, startup
from .lookup import SqlAlchemyDataLookup
from .tables import GrantScope, create_all_tables, metadata

__all__ = [
    "GrantScope",
    "SqlAlchemyDataLookup",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
