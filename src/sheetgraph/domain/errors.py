"""Errors raised while importing a workbook."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sheetgraph.domain.model import Row


class SheetImportError(RuntimeError):
    """Base class for every import failure."""


class ArgumentError(SheetImportError, ValueError):
    """Raised when a required call parameter is missing or unusable."""


class SheetOrderError(SheetImportError):
    """Raised when the control or role sheet is not where it must be."""


class TypeNotFoundError(SheetImportError):
    """Raised when the lookup does not know the requested type."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Type [{type_name}] does not exist.")
        self.type_name = type_name


class SchemaError(SheetImportError):
    """Raised when a type schema cannot drive the mapping."""

    def __init__(self, type_name: str, message: str | None = None) -> None:
        super().__init__(message or f"Type [{type_name}] does not have properties.")
        self.type_name = type_name


class ValidationError(SheetImportError):
    """Raised when a row lacks a required property and no id/alias override."""

    def __init__(self, message: str, *, property_name: str, row: Row) -> None:
        super().__init__(message)
        self.property_name = property_name
        self.row = row


class EntityLookupError(SheetImportError):
    """Raised when a call into the lookup fails."""

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


__all__ = [
    "ArgumentError",
    "EntityLookupError",
    "SchemaError",
    "SheetImportError",
    "SheetOrderError",
    "TypeNotFoundError",
    "ValidationError",
]
