"""Domain port definitions for adapters."""

from __future__ import annotations

from .lookup import DataLookup, ensure_lookup
from .reading import WorkbookReader

__all__ = [
    "DataLookup",
    "WorkbookReader",
    "ensure_lookup",
]
