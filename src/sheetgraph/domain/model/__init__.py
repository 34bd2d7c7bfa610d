"""Public domain model surface."""

from __future__ import annotations

from sheetgraph.domain.model.entity import Entity, RelationshipRef, RelationshipValue
from sheetgraph.domain.model.rights import MacGrants, Right, Rights
from sheetgraph.domain.model.schema import PropertyDescriptor, TypeDescriptor
from sheetgraph.domain.model.workbook import CellValue, Row, Sheet, Workbook

__all__ = [
    "CellValue",
    "Entity",
    "MacGrants",
    "PropertyDescriptor",
    "RelationshipRef",
    "RelationshipValue",
    "Right",
    "Rights",
    "Row",
    "Sheet",
    "TypeDescriptor",
    "Workbook",
]
